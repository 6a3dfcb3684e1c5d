"""Prompted image edits on gpt-image-1-edit: anime filter and celebrity selfie."""

from app.effects.base import AuthScheme, EffectSpec
from app.effects.fields import ChoiceField, UrlField

IMAGE_EDIT_ENDPOINT = "gpt-image-1-edit"

ANIME_STYLE_PROMPTS = {
    "ghibli": "Ghibli anime style, cinematic lighting, expressive face, digital painting",
}
ANIME_NEGATIVE_PROMPT = "blurry, ugly, bad quality, extra limbs, deformed face"


def build_anime_payload(params, media):
    return {
        "image_urls": [params["imageUrl"]],
        "prompt": ANIME_STYLE_PROMPTS[params["style"]],
        "negative_prompt": ANIME_NEGATIVE_PROMPT,
        "guidance_scale": 5,
        "num_inference_steps": 30,
        "response_format": "url",
    }


anime_filter = EffectSpec(
    slug="anime-filter",
    name="Anime Filter",
    description="Redraws a photo in an anime style.",
    endpoint=IMAGE_EDIT_ENDPOINT,
    auth=AuthScheme.BEARER,
    fields=[
        UrlField("imageUrl"),
        ChoiceField("style", list(ANIME_STYLE_PROMPTS), label="Style", plural="styles"),
    ],
    build_payload=build_anime_payload,
    result_key="imageUrl",
    result_path=("images", 0, "url"),
)


CELEBRITY_NAMES = {
    "jackie_chan": "Jackie Chan",
    "michael_jackson": "Michael Jackson",
    "leonardo_dicaprio": "Leonardo DiCaprio",
    "will_smith": "Will Smith",
    "brad_pitt": "Brad Pitt",
    "angelina_jolie": "Angelina Jolie",
    "tom_cruise": "Tom Cruise",
    "scarlett_johansson": "Scarlett Johansson",
    "robert_downey_jr": "Robert Downey Jr.",
}

LANDMARK_NAMES = {
    "oriental_pearl": "Oriental Pearl Tower in Shanghai",
    "eiffel_tower": "Eiffel Tower in Paris",
    "colosseum": "Colosseum in Rome",
    "statue_of_liberty": "Statue of Liberty in New York",
    "big_ben": "Big Ben in London",
    "sydney_opera_house": "Sydney Opera House in Australia",
    "mount_fuji": "Mount Fuji in Japan",
    "taj_mahal": "Taj Mahal in India",
    "machu_picchu": "Machu Picchu in Peru",
    "great_wall": "Great Wall of China",
    "golden_gate_bridge": "Golden Gate Bridge in San Francisco",
    "christ_redeemer": "Christ the Redeemer statue in Rio de Janeiro",
}

CUSTOM_CELEBRITY_PREFIX = "custom_"

SELFIE_PROMPT = (
    "A deliberately mundane and awkward iPhone selfie featuring [person in the image] "
    "and {celebrity} casually posing together in front of {landmark}. The photo should "
    "look completely unplanned: no intentional framing, poor composition, and slightly "
    "off-angle, as if taken hastily. Include subtle motion blur, uneven lighting with mild "
    "overexposure, and a messy, cramped frame (like it was accidentally snapped while "
    "pulling the phone from a pocket). The overall vibe should be an intentionally bad, "
    "forgettable snapshot with zero artistic effort, just an ordinary, awkward moment captured."
)


def celebrity_display_name(celebrity: str) -> str:
    """Map a celebrity key to a display name; custom_<words> is title-cased."""
    if celebrity.startswith(CUSTOM_CELEBRITY_PREFIX):
        words = celebrity[len(CUSTOM_CELEBRITY_PREFIX):].replace("_", " ").split()
        return " ".join(w[:1].upper() + w[1:].lower() for w in words)
    return CELEBRITY_NAMES[celebrity]


def build_selfie_payload(params, media):
    prompt = SELFIE_PROMPT.format(
        celebrity=celebrity_display_name(params["celebrity"]),
        landmark=LANDMARK_NAMES[params["landmark"]],
    )
    return {
        "image_urls": [params["imageUrl"]],
        "prompt": prompt,
        "size": "auto",
        "quality": "auto",
        "background": "opaque",
        "output_compression": 100,
    }


celebrity_selfie = EffectSpec(
    slug="celebrity-selfie",
    name="Celebrity Selfie",
    description="Places the person in a candid selfie with a celebrity at a landmark.",
    endpoint=IMAGE_EDIT_ENDPOINT,
    auth=AuthScheme.BEARER,
    fields=[
        UrlField("imageUrl"),
        ChoiceField(
            "celebrity",
            list(CELEBRITY_NAMES),
            label="Celebrity",
            plural="celebrities",
            custom_prefix=CUSTOM_CELEBRITY_PREFIX,
        ),
        ChoiceField("landmark", list(LANDMARK_NAMES), label="Landmark", plural="landmarks"),
    ],
    build_payload=build_selfie_payload,
    result_key="imageUrl",
    result_path=("images", 0, "url"),
    # JPEG bodies are returned inline as a data URL, never re-uploaded
    binary_types=("image/jpeg",),
)
