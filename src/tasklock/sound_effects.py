#!/usr/bin/env python3
"""
Sound effect catalog for TaskLock.
Builds the list of available pulse sounds and resolves stored selections.
"""

import locale
import logging
import re
import string
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

NONE_SOUND_EFFECT_ID = "none"
DEFAULT_SOUND_EFFECT_ID = "glass"  # /System/Library/Sounds/Glass.aiff
AUDIO_EXTENSIONS = (".mp3", ".aiff", ".aif", ".wav", ".m4a", ".caf")
SOUND_SUBDIRECTORY = "sound_effects"

_COPY_SUFFIX = re.compile(r"\s*\(\d+\)$")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_SEPARATORS = re.compile(r"[_-]+")
_DIGITS = re.compile(r"(\d+)")


@dataclass(frozen=True)
class SoundEffect:
    """One selectable pulse sound. ``locator`` is None for entries that play nothing."""

    id: str
    display_name: str
    locator: Optional[Path] = None


NONE_SOUND_EFFECT = SoundEffect(NONE_SOUND_EFFECT_ID, "None", None)


def resolve_sound_effect_id(
    requested_id: str, catalog: Sequence[SoundEffect], default_id: str
) -> str:
    """Resolve a requested sound id against the catalog.

    Falls back to the default id, then the first catalog entry, then the
    default id verbatim when the catalog is empty.
    """
    ids = [effect.id for effect in catalog]
    if requested_id in ids:
        return requested_id
    if default_id in ids:
        return default_id
    if ids:
        return ids[0]
    return default_id


def natural_sort_key(text: str) -> List:
    """Finder-style ordering: case-insensitive, locale-aware, numbers by value.

    Accents are folded first so "Éclair" sorts with "eclair" even when the
    process still runs in the C collation locale.
    """
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    parts = _DIGITS.split(folded)
    return [int(part) if index % 2 else locale.strxfrm(part) for index, part in enumerate(parts)]


def normalize_base_name(name: str) -> str:
    """Strip whitespace and a trailing copy counter such as ``" (2)"``."""
    return _COPY_SUFFIX.sub("", name.strip())


def make_identifier(name: str) -> str:
    identifier = _NON_ALNUM.sub("_", name.lower()).strip("_")
    return identifier or "sound"


def make_display_name(name: str) -> str:
    spaced = _SEPARATORS.sub(" ", name).strip()
    if not spaced:
        return "Sound"

    if spaced.lower().startswith("sound"):
        suffix = spaced[len("sound"):].strip()
        return f"Sound {suffix}" if suffix else "Sound"

    return string.capwords(spaced)


def collect_audio_paths(
    locations: Iterable[Path], extensions: Tuple[str, ...] = AUDIO_EXTENSIONS
) -> List[Path]:
    """Find audio files in each location and its ``sound_effects`` folder.

    Args:
        locations: Directories to scan; missing ones are skipped
        extensions: Lower-case file suffixes to accept

    Returns:
        Paths deduplicated by their resolved location
    """
    seen = set()
    collected: List[Path] = []

    for location in locations:
        base = Path(location).expanduser()
        for directory in (base / SOUND_SUBDIRECTORY, base):
            if not directory.is_dir():
                continue
            try:
                candidates = sorted(directory.iterdir())
            except OSError as e:
                logger.warning("Could not scan sound directory %s: %s", directory, e)
                continue
            for path in candidates:
                if not path.is_file() or path.suffix.lower() not in extensions:
                    continue
                canonical = str(path.resolve())
                if canonical in seen:
                    continue
                seen.add(canonical)
                collected.append(path)

    return collected


def build_sound_effects(
    paths: Iterable[Path], default_id: str = DEFAULT_SOUND_EFFECT_ID
) -> Tuple[SoundEffect, ...]:
    """Turn audio file paths into the ordered catalog, led by the "none" entry."""
    seen = set()
    effects: List[SoundEffect] = []

    for path in sorted(paths, key=lambda p: natural_sort_key(p.name)):
        base_name = normalize_base_name(path.stem)
        identifier = make_identifier(base_name)
        if identifier in seen:
            continue
        seen.add(identifier)
        effects.append(SoundEffect(identifier, make_display_name(base_name), path))

    effects.sort(key=lambda effect: natural_sort_key(effect.display_name))

    if not effects:
        logger.warning(
            "No sound effects found; falling back to %r", default_id
        )
        effects = [SoundEffect(default_id, make_display_name(default_id), None)]

    return (NONE_SOUND_EFFECT, *effects)


class SoundEffectsLibrary:
    """Immutable catalog of sound effects, built once at startup."""

    def __init__(
        self,
        effects: Sequence[SoundEffect],
        default_id: str = DEFAULT_SOUND_EFFECT_ID,
    ):
        self.effects: Tuple[SoundEffect, ...] = tuple(effects)
        self.default_id = default_id
        self._lookup: Dict[str, SoundEffect] = {}
        for effect in self.effects:
            self._lookup.setdefault(effect.id, effect)

    @classmethod
    def from_locations(
        cls, locations: Iterable[Path], default_id: str = DEFAULT_SOUND_EFFECT_ID
    ) -> "SoundEffectsLibrary":
        paths = collect_audio_paths(locations)
        library = cls(build_sound_effects(paths, default_id), default_id)
        logger.info("Loaded %d sound effects", len(library.effects) - 1)
        return library

    def effect(self, effect_id: str) -> Optional[SoundEffect]:
        return self._lookup.get(effect_id)

    def ids(self) -> List[str]:
        return [effect.id for effect in self.effects]

    def resolve(self, requested_id: str) -> str:
        return resolve_sound_effect_id(requested_id, self.effects, self.default_id)

    def __len__(self) -> int:
        return len(self.effects)

    def __iter__(self):
        return iter(self.effects)
