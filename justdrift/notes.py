"""Pitch classes and octave-aware notes on the 12-tone keyboard."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from justdrift.errors import InvalidParameter

SEMITONES_PER_OCTAVE = 12
MIDDLE_C_MIDI = 60  # C4 in Scientific Pitch Notation


class PitchClass(IntEnum):
    """Chromatic pitch class, 0 = C … 11 = B."""

    C = 0
    C_SHARP = 1
    D = 2
    D_SHARP = 3
    E = 4
    F = 5
    F_SHARP = 6
    G = 7
    G_SHARP = 8
    A = 9
    A_SHARP = 10
    B = 11

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """
        Parse a note name such as ``"C"``, ``"f#"`` or ``"Bb"``.

        Sharps and flats may cross a letter boundary (``"Cb"`` is B,
        ``"E#"`` is F). Parsing is case-insensitive.

        Raises:
            InvalidParameter: If the name is not a known note name.
        """
        key = name.strip().lower()
        if key not in _NAME_TO_PITCH_CLASS:
            raise InvalidParameter(f"Invalid note name '{name}'.")
        return _NAME_TO_PITCH_CLASS[key]

    def shift(self, half_steps: int) -> PitchClass:
        return PitchClass((self + half_steps) % SEMITONES_PER_OCTAVE)

    def __str__(self) -> str:
        return _SHARP_NAMES[self]


_SHARP_NAMES: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
_LETTERS: dict[str, int] = {"c": 0, "d": 2, "e": 4, "f": 5, "g": 7, "a": 9, "b": 11}

_NAME_TO_PITCH_CLASS: dict[str, PitchClass] = {}
for _letter, _semitone in _LETTERS.items():
    _NAME_TO_PITCH_CLASS[_letter] = PitchClass(_semitone)
    _NAME_TO_PITCH_CLASS[_letter + "#"] = PitchClass((_semitone + 1) % SEMITONES_PER_OCTAVE)
    _NAME_TO_PITCH_CLASS[_letter + "b"] = PitchClass((_semitone - 1) % SEMITONES_PER_OCTAVE)


@dataclass(frozen=True)
class Note:
    """
    A concrete keyboard note.

    Attributes:
        pitch_class: Pitch class within the octave.
        octave:      Scientific octave number (C4 = middle C).
    """

    pitch_class: PitchClass
    octave: int

    @classmethod
    def parse(cls, name: str, octave: int) -> Note:
        return cls(PitchClass.parse(name), octave)

    @classmethod
    def from_midi(cls, midi_number: int) -> Note:
        octave, semitone = divmod(midi_number, SEMITONES_PER_OCTAVE)
        return cls(PitchClass(semitone), octave - 1)

    @property
    def midi_number(self) -> int:
        """MIDI note number; C-1 = 0, C4 = 60."""
        return (self.octave + 1) * SEMITONES_PER_OCTAVE + self.pitch_class

    def shift(self, half_steps: int) -> Note:
        """Move by ``half_steps``, carrying into the octave as needed."""
        octave_delta, semitone = divmod(self.pitch_class + half_steps, SEMITONES_PER_OCTAVE)
        return Note(PitchClass(semitone), self.octave + octave_delta)

    def __str__(self) -> str:
        return f"{self.pitch_class!s}{self.octave}"
