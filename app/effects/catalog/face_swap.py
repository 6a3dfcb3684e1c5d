"""Face swap onto a target video: the classic videofaceswap model and ai-face-swap."""

from app.effects.base import EffectSpec
from app.effects.fields import ChoiceField, NumberField, UrlField

VIDEO_BINARY_TYPES = ("image/jpeg", "video/mp4")


def build_faceswap_payload(params, media):
    return {
        "source_img": media["sourceImageUrl"],
        "video_input": params["videoUrl"],
        "face_restore": True,
        "input_faces_index": 0,
        "source_faces_index": 0,
        "face_restore_visibility": 1,
        "codeformer_weight": 0.95,
        "detect_gender_input": "no",
        "detect_gender_source": "no",
        "frame_load_cap": 0,
        "base_64": False,
    }


faceswap = EffectSpec(
    slug="faceswap",
    name="Face Swap",
    description="Swaps the face from a photo onto every frame of a video.",
    endpoint="videofaceswap",
    accept="application/json, video/mp4",
    fields=[
        UrlField("sourceImageUrl"),
        UrlField("videoUrl"),
    ],
    build_payload=build_faceswap_payload,
    inline_media=("sourceImageUrl",),
    binary_types=VIDEO_BINARY_TYPES,
    result_key="videoUrl",
    result_path=("video", 0, "url"),
    upload_folder="faceswap-videos",
    retention_hours=24,
)


PIXEL_BOOSTS = ["128x128", "256x256", "384x384", "512x512", "768x768", "1024x1024"]
FACE_SELECTOR_MODES = ["many", "one", "reference"]
FACE_SELECTOR_ORDERS = [
    "left-right", "right-left", "top-bottom", "bottom-top",
    "small-large", "large-small", "best-worst", "worst-best",
]


def build_video_face_swap_payload(params, media):
    return {
        "source_image": media["sourceImageUrl"],
        "target": params["targetVideoUrl"],
        "pixel_boost": params["pixelBoost"],
        "face_selector_mode": params["faceSelectorMode"],
        "face_selector_order": params["faceSelectorOrder"],
        "face_selector_gender": "none",
        "face_selector_race": "none",
        "face_selector_age_start": params["faceSelectorAgeStart"],
        "face_selector_age_end": params["faceSelectorAgeEnd"],
        "reference_face_distance": params["referenceFaceDistance"],
        "reference_frame_number": params["referenceFrameNumber"],
        "base64": False,
    }


video_face_swap = EffectSpec(
    slug="video-face-swap",
    name="Video Face Swap",
    description="Face swap with face-selection controls for multi-person videos.",
    endpoint="ai-face-swap",
    fields=[
        UrlField("sourceImageUrl"),
        UrlField("targetVideoUrl"),
        ChoiceField("pixelBoost", PIXEL_BOOSTS, default="384x384", label="Pixel boost"),
        ChoiceField(
            "faceSelectorMode", FACE_SELECTOR_MODES, default="reference",
            label="Face selector mode", plural="modes",
        ),
        ChoiceField(
            "faceSelectorOrder", FACE_SELECTOR_ORDERS, default="large-small",
            label="Face selector order", plural="orders",
        ),
        NumberField("faceSelectorAgeStart", minimum=0, maximum=100, default=0, integer=True),
        NumberField("faceSelectorAgeEnd", minimum=0, maximum=100, default=100, integer=True),
        NumberField("referenceFaceDistance", minimum=0, maximum=1.5, default=0.6),
        NumberField("referenceFrameNumber", minimum=0, default=1, integer=True),
    ],
    build_payload=build_video_face_swap_payload,
    inline_media=("sourceImageUrl",),
    binary_types=VIDEO_BINARY_TYPES,
    result_key="videoUrl",
    result_path=("video", 0, "url"),
    upload_folder="video-face-swap-videos",
)
