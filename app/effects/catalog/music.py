"""Text-to-music generation on ACE-Step."""

from app.effects.base import EffectSpec
from app.effects.fields import NumberField, TextField


def build_music_payload(params, media):
    payload = {
        "genres": params["genres"],
        "lyrics": params["lyrics"],
        "lyrics_strength": params["lyricsStrength"],
        "output_seconds": params["duration"],
        "shift": params["pitchShift"],
        "steps": params["steps"],
        "cfg": params["cfg"],
        "base64": False,
    }
    if params.get("seed") is not None:
        payload["seed"] = params["seed"]
    return payload


music_generator = EffectSpec(
    slug="music-generator",
    name="Music Generator",
    description="Composes a song from genre tags and lyrics.",
    endpoint="ace-step-music",
    fields=[
        TextField("genres", description="Comma separated genre tags"),
        TextField("lyrics"),
        NumberField("duration", minimum=10, maximum=240, default=60, description="Seconds"),
        NumberField("lyricsStrength", minimum=0.1, maximum=10, default=1),
        NumberField("pitchShift", minimum=0, maximum=10, default=4),
        NumberField("steps", minimum=10, maximum=150, default=50, integer=True),
        NumberField("cfg", minimum=1, maximum=15, default=4),
        NumberField("seed", default=None, integer=True),
    ],
    build_payload=build_music_payload,
    binary_types=("audio/", "video/", "application/octet-stream"),
    result_key="audioUrl",
    result_path=("audio", 0, "url"),
    upload_folder="music-generator-audio",
)
