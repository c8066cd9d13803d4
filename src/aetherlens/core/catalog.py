"""Static creative catalog: style cores, presets, tips and inspirations.

These are constants rather than configuration because they define the core
creative identity of the tool.  Users control variation by picking from them
and by editing their own prompt text.
"""

import random
import re

from .models import AspectRatio, InspirationPrompt, NegativePreset, StyleCore
from .validation import IDENTITY_STYLES

STYLE_CORES: tuple[StyleCore, ...] = (
    StyleCore(
        id="hyperrealism",
        name="Hyperrealism",
        thumbnail="https://picsum.photos/seed/hyperrealism/200",
        description="Ultra-detailed, photorealistic images that mimic high-resolution photography.",
        keywords=(
            "photorealistic, 8K, hyperdetailed, sharp focus, detailed skin texture, "
            "cinematic lighting, professional photography, Canon EOS 5D Mark IV, "
            "50mm f/1.8 lens, masterpiece"
        ),
        negative_keywords=(
            "painting, cartoon, illustration, anime, blurry, deformed hands, unrealistic"
        ),
    ),
    StyleCore(
        id="epic-cinema",
        name="Epic Cinema",
        thumbnail="https://picsum.photos/seed/epiccinema/200",
        description="Dramatic, wide-angle shots with cinematic lighting and color grading.",
        keywords=(
            "cinematic still from a movie, epic composition, dramatic lighting, "
            "anamorphic lens flare, wide angle shot, color graded, film grain, "
            "directed by Denis Villeneuve"
        ),
        negative_keywords="flat lighting, boring, illustration, 3D render, portrait, closeup",
    ),
    StyleCore(
        id="classic-anime",
        name="Classic Anime",
        thumbnail="https://picsum.photos/seed/classicanime/200",
        description="Vibrant, cel-shaded art reminiscent of 90s hand-drawn anime masterpieces.",
        keywords=(
            "classic 90s anime style, cel-shaded, vibrant colors, hand-drawn, masterpiece, "
            "by Hayao Miyazaki, Studio Ghibli"
        ),
        negative_keywords="photorealistic, 3D, realistic, photo, modern anime style",
    ),
    StyleCore(
        id="dreamy-surrealism",
        name="Dreamy Surrealism",
        thumbnail="https://picsum.photos/seed/surrealism/200",
        description="Ethereal, dreamlike scenes that juxtapose strange objects and concepts.",
        keywords=(
            "surrealism, dreamlike, ethereal, Salvador Dalí style, juxtaposition of strange "
            "objects, melting, floating, symbolic, metaphorical, subconscious mind"
        ),
        negative_keywords="realistic, normal, mundane, boring, straightforward, literal",
    ),
    StyleCore(
        id="cyberpunk-art",
        name="Cyberpunk Art",
        thumbnail="https://picsum.photos/seed/cyberpunk/200",
        description="Futuristic cityscapes with neon lights, glowing elements, and intricate details.",
        keywords=(
            "cyberpunk, futuristic, neon lights, glowing elements, biomechanical, intricate "
            "details, octane render, trending on ArtStation, dystopian city"
        ),
        negative_keywords="ancient, historical, realistic photo, nature, fantasy",
    ),
    StyleCore(
        id="fantasy-art",
        name="Fantasy Art",
        thumbnail="https://picsum.photos/seed/fantasy/200",
        description="Epic fantasy landscapes, characters, and creatures.",
        keywords=(
            "epic fantasy art, high fantasy, detailed illustration, lord of the rings style, "
            "magic, dragons, castles, trending on ArtStation, by Frank Frazetta"
        ),
        negative_keywords="sci-fi, cyberpunk, modern, photo, realistic",
    ),
    StyleCore(
        id="gothic-noir",
        name="Gothic Noir",
        thumbnail="https://picsum.photos/seed/gothicnoir/200",
        description="High-contrast, dramatic scenes inspired by film noir and gothic architecture.",
        keywords=(
            "gothic architecture, film noir aesthetic, Blade Runner, high contrast, dramatic "
            "shadows, rain-soaked streets, desaturated colors, mysterious mood, cinematic"
        ),
        negative_keywords="bright colors, sunny, cheerful, cute, cartoon, flat lighting",
    ),
    StyleCore(
        id="solarpunk",
        name="Solarpunk Utopia",
        thumbnail="https://picsum.photos/seed/solarpunk/200",
        description="Lush, green futures where technology and nature harmoniously coexist.",
        keywords=(
            "solarpunk, futuristic eco-city, organic architecture, clean energy, lush "
            "greenery, vibrant colors, optimistic, harmonious, sustainable, art nouveau"
        ),
        negative_keywords="dystopian, pollution, cyberpunk, dark, concrete, barren",
    ),
    StyleCore(
        id="baroque",
        name="Baroque Grandeur",
        thumbnail="https://picsum.photos/seed/baroque/200",
        description="Ornate, dramatic, and emotional scenes reminiscent of Baroque paintings.",
        keywords=(
            "Baroque painting, chiaroscuro, dramatic lighting, rich details, ornate, "
            "emotional, masterpiece, style of Caravaggio, Rembrandt, tenebrism"
        ),
        negative_keywords="minimalist, simple, modern, flat, calm, pastel colors",
    ),
    StyleCore(
        id="vintage-polaroid",
        name="Vintage Polaroid",
        thumbnail="https://picsum.photos/seed/polaroid/200",
        description="Nostalgic, slightly faded images with the iconic soft focus of Polaroid photos.",
        keywords=(
            "vintage Polaroid photo, faded colors, soft contrast, film grain, light leaks, "
            "nostalgic, 1970s aesthetic, retro, instant camera look"
        ),
        negative_keywords="digital, sharp focus, vibrant colors, 4K, modern, futuristic",
    ),
    StyleCore(
        id="abstract-expressionism",
        name="Abstract Expressionism",
        thumbnail="https://picsum.photos/seed/abstract/200",
        description="Non-representational art focusing on emotion through color and form.",
        keywords=(
            "abstract expressionism, action painting, style of Jackson Pollock, "
            "non-representational, chaotic energy, splatters, drips, emotional, gestural"
        ),
        negative_keywords=(
            "photorealistic, representational, figurative, calm, ordered, precise"
        ),
    ),
)

ASPECT_RATIOS: tuple[AspectRatio, ...] = (
    AspectRatio(id="square", label="Square", value="1:1"),
    AspectRatio(id="landscape", label="Landscape", value="16:9"),
    AspectRatio(id="portrait", label="Portrait", value="9:16"),
    AspectRatio(id="standard", label="Standard", value="4:3"),
    AspectRatio(id="tall", label="Tall", value="3:4"),
)

NEGATIVE_PRESETS: tuple[NegativePreset, ...] = (
    NegativePreset(
        name="Realism",
        value=(
            "ugly, deformed, noisy, blurry, distorted, grainy, plastic, fake, cartoon, "
            "3d render, painting, illustration, anime"
        ),
    ),
    NegativePreset(
        name="Anime",
        value="photorealistic, photo, 3d, realism, ugly, deformed, noisy, blurry, watermark",
    ),
    NegativePreset(
        name="Text",
        value="text, watermark, signature, letters, words, font, typography",
    ),
)

LOADING_TIPS: tuple[str, ...] = (
    "Try combining two different Style Cores in your prompt for unique results.",
    "Use 'cinematic lighting' or 'dramatic lighting' to create more impactful scenes.",
    "The 'Aether's Eye' tool can deconstruct an image into a detailed prompt. "
    "Try it with your favorite art!",
    "Negative prompts are powerful. Use them to remove elements you don't want, "
    "like 'text' or 'blurry'.",
    "Keywords like 'trending on ArtStation' or 'masterpiece' can often boost the quality "
    "of fantasy and sci-fi art.",
    "For portraits, try specifying emotions or expressions like "
    "'a look of serene contemplation'.",
    "The 'Prompt Alchemist' can often reveal more creative ways to phrase your ideas.",
    "Experiment with different aspect ratios to change the entire composition "
    "and feel of your image.",
)

INSPIRATION_PROMPTS: tuple[InspirationPrompt, ...] = (
    InspirationPrompt(
        title="Cosmic Leviathan",
        prompt=(
            "A colossal space whale swimming through a vibrant nebula, its skin shimmering "
            "with constellations, epic sci-fi art, masterpiece, 8K, cinematic."
        ),
    ),
    InspirationPrompt(
        title="Steampunk Treehouse",
        prompt=(
            "An incredibly detailed steampunk treehouse city, with brass pipes and glowing "
            "gears, nestled in a giant ancient tree, fantasy art, volumetric lighting."
        ),
    ),
    InspirationPrompt(
        title="Floating Market",
        prompt=(
            "A bustling floating market in a serene, sun-drenched Ghibli-style river city, "
            "Studio Ghibli anime style, warm and inviting, detailed."
        ),
    ),
    InspirationPrompt(
        title="Gothic Android",
        prompt=(
            "A portrait of a beautiful android with porcelain skin and intricate gothic "
            "filigree, sitting in a dimly lit Victorian room, dramatic lighting, photorealistic."
        ),
    ),
    InspirationPrompt(
        title="Cyber-Samurai Duel",
        prompt=(
            "A samurai with a laser katana dueling a robot ninja on a rooftop in a rainy, "
            "neon-lit cyberpunk Tokyo, dynamic action shot, Blade Runner aesthetic."
        ),
    ),
)

# Ordered: the first matching rule wins.
_STYLE_SUGGESTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\b(photo|realistic|photograph|8k|canon|dslr)\b"), "hyperrealism"),
    (re.compile(r"\b(anime|manga|ghibli|waifu|cel-shaded)\b"), "classic-anime"),
    (re.compile(r"\b(cyberpunk|neon|futuristic|dystopian|blade runner)\b"), "cyberpunk-art"),
    (re.compile(r"\b(fantasy|dragon|castle|sword|magic|elf|dwarf)\b"), "fantasy-art"),
    (re.compile(r"\b(cinematic|movie|dramatic|epic)\b"), "epic-cinema"),
    (re.compile(r"\b(polaroid|vintage|retro|1970s|faded)\b"), "vintage-polaroid"),
    (re.compile(r"\b(gothic|noir|dark|shadows|rain)\b"), "gothic-noir"),
    (re.compile(r"\b(baroque|ornate|rembrandt|caravaggio)\b"), "baroque"),
)

_STYLES_BY_ID = {style.id: style for style in STYLE_CORES}


def get_style(style_id: str | None) -> StyleCore | None:
    """Look up a style core by id; unknown or empty ids return None."""
    if not style_id:
        return None
    return _STYLES_BY_ID.get(style_id)


def toggle_style(active_style_id: str | None, clicked_id: str) -> str | None:
    """Clicking the active style deselects it; any other click selects."""
    return None if active_style_id == clicked_id else clicked_id


def filter_styles(term: str | None) -> list[StyleCore]:
    """Case-insensitive filter over style name, description and keywords."""
    if not term:
        return list(STYLE_CORES)
    needle = term.lower()
    return [
        style
        for style in STYLE_CORES
        if needle in style.name.lower()
        or needle in style.description.lower()
        or needle in style.keywords.lower()
    ]


def filter_inspirations(term: str | None) -> list[InspirationPrompt]:
    """Case-insensitive filter over inspiration titles and prompts."""
    if not term:
        return list(INSPIRATION_PROMPTS)
    needle = term.lower()
    return [
        item
        for item in INSPIRATION_PROMPTS
        if needle in item.title.lower() or needle in item.prompt.lower()
    ]


def suggest_style(prompt: str | None) -> str | None:
    """Suggest a style core id from keywords in the prompt."""
    if not prompt:
        return None
    text = prompt.lower()
    for pattern, style_id in _STYLE_SUGGESTIONS:
        if pattern.search(text):
            return style_id
    return None


def get_negative_preset(name: str) -> NegativePreset | None:
    return next((p for p in NEGATIVE_PRESETS if p.name.lower() == name.lower()), None)


def pick_loading_tip(rng: random.Random | None = None) -> str:
    """Pick a random tip to show while a request is running."""
    return (rng or random).choice(LOADING_TIPS)


__all__ = [
    "ASPECT_RATIOS",
    "IDENTITY_STYLES",
    "INSPIRATION_PROMPTS",
    "LOADING_TIPS",
    "NEGATIVE_PRESETS",
    "STYLE_CORES",
    "filter_inspirations",
    "filter_styles",
    "get_negative_preset",
    "get_style",
    "pick_loading_tip",
    "suggest_style",
    "toggle_style",
]
