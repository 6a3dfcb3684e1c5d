"""Single-image video effects: muscle surge and warmth of Jesus."""

from app.effects.base import EffectSpec
from app.effects.fields import ChoiceField, NumberField, UrlField

QUALITIES = ["360p", "540p", "720p", "1080p"]


def build_muscle_payload(params, media):
    return {
        "image_url": params["imageUrl"],
        "duration": params["duration"],
        "quality": params["quality"],
        "seed": params["seed"],
        "motion_mode": params["motionMode"],
    }


muscle_surge = EffectSpec(
    slug="muscle-surge",
    name="Muscle Surge",
    description="Animates the subject flexing into an exaggerated muscular build.",
    endpoint="muscle-surge",
    fields=[
        UrlField("imageUrl"),
        ChoiceField("duration", [5], default=5, label="Duration", plural="durations", numeric=True),
        ChoiceField("quality", QUALITIES, default="540p", label="Quality", plural="qualities"),
        NumberField("seed", default=56698, integer=True),
        ChoiceField(
            "motionMode", ["normal", "fast"], default="normal", label="Motion mode", plural="modes"
        ),
    ],
    build_payload=build_muscle_payload,
    binary_types=("image/jpeg", "video/mp4"),
    result_key="videoUrl",
    result_path=("video", 0, "url"),
    upload_folder="muscle-surge-videos",
)


WARMTH_PROMPT = "Generate a video of Jesus hugging the person in the image"


def build_warmth_payload(params, media):
    payload = {
        "image_url": params["imageUrl"],
        "duration": params["duration"],
        "quality": params["quality"],
        "prompt": WARMTH_PROMPT,
    }
    if params.get("seed") is not None:
        payload["seed"] = params["seed"]
    # the vendor default is already realistic
    style = params.get("style")
    if style and style != "realistic":
        payload["style"] = style
    return payload


warmth_of_jesus = EffectSpec(
    slug="warmth-of-jesus",
    name="Warmth of Jesus",
    description="Generates a short video of Jesus embracing the person in the photo.",
    endpoint="warmth-of-jesus",
    fields=[
        UrlField("imageUrl"),
        ChoiceField("duration", [5, 8], default=5, label="Duration", plural="durations", numeric=True),
        ChoiceField("quality", QUALITIES, default="540p", label="Quality", plural="qualities"),
        NumberField("seed", minimum=1, maximum=999999, default=None, integer=True),
        ChoiceField(
            "style",
            ["anime", "3d_animation", "clay", "comic", "cyberpunk", "realistic"],
            default=None,
            label="Style",
            plural="styles",
        ),
    ],
    build_payload=build_warmth_payload,
    binary_types=("video/mp4",),
    result_key="videoUrl",
    result_path=("video", 0, "url"),
    upload_folder="warmth-of-jesus-videos",
    retention_hours=24,
)
