"""Kling image-to-video effects: AI kiss, AI hug and the jellycat plush effect."""

from app.effects.base import EffectSpec
from app.effects.fields import ChoiceField, UrlField

VIDEO_BINARY_TYPES = ("image/jpeg", "video/mp4")
VIDEO_RESULT_PATH = ("video", 0, "url")

DURATIONS = [5, 10]


def build_pair_payload(params, media):
    return {
        "first_reference_image": media["firstImageUrl"],
        "second_reference_image": media["secondImageUrl"],
        "mode": params["mode"],
        "duration": params["duration"],
    }


def _pair_effect(slug, name, endpoint, folder, description):
    return EffectSpec(
        slug=slug,
        name=name,
        description=description,
        endpoint=endpoint,
        fields=[
            UrlField("firstImageUrl"),
            UrlField("secondImageUrl"),
            ChoiceField("mode", ["std", "pro"], default="pro", label="Mode", plural="modes"),
            ChoiceField(
                "duration", DURATIONS, default=5, label="Duration", plural="durations", numeric=True
            ),
        ],
        build_payload=build_pair_payload,
        inline_media=("firstImageUrl", "secondImageUrl"),
        binary_types=VIDEO_BINARY_TYPES,
        result_key="videoUrl",
        result_path=VIDEO_RESULT_PATH,
        upload_folder=folder,
    )


ai_kiss = _pair_effect(
    "ai-kiss", "AI Kiss", "kling-kiss", "ai-kiss-videos",
    "Animates two portraits into a short kissing clip.",
)

ai_hug = _pair_effect(
    "ai-hug", "AI Hug", "kling-hug", "ai-hug-videos",
    "Animates two portraits into a short hugging clip.",
)


def build_jellycat_payload(params, media):
    return {
        "image": media["imageUrl"],
        "mode": params["mode"],
        "duration": params["duration"],
    }


jellycat_effect = EffectSpec(
    slug="jellycat-effect",
    name="Jellycat Effect",
    description="Turns the subject of a photo into a fuzzy plush toy video.",
    endpoint="kling-fuzzyfuzzy",
    fields=[
        UrlField("imageUrl"),
        ChoiceField("mode", ["pro", "normal"], default="pro", label="Mode", plural="modes"),
        ChoiceField(
            "duration", DURATIONS, default=5, label="Duration", plural="durations", numeric=True
        ),
    ],
    build_payload=build_jellycat_payload,
    inline_media=("imageUrl",),
    binary_types=VIDEO_BINARY_TYPES,
    result_key="videoUrl",
    result_path=VIDEO_RESULT_PATH,
    upload_folder="jellycat-effect-videos",
    retention_hours=24,
)
