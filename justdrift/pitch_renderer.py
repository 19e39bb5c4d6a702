"""PitchRenderer: Strategy pattern for turning interval tokens into notes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from justdrift.intervals import JustInterval
from justdrift.notes import Note


class PitchRenderer(ABC):
    """
    Abstract Strategy for rendering a token sequence as concrete notes.

    Concrete subclasses implement ``render()``; the result always starts with
    the starting note and adds one note per token.
    """

    @abstractmethod
    def render(self, start: Note, tokens: Sequence[JustInterval]) -> list[Note]:
        """
        Map an ordered token sequence to notes.

        Args:
            start:  Note the sequence begins on.
            tokens: Ordered interval tokens, one step per token.

        Returns:
            ``len(tokens) + 1`` notes, beginning with ``start``.
        """


class ChromaticPitchRenderer(PitchRenderer):
    """Walks the 12-tone keyboard by each token's half-step count."""

    def render(self, start: Note, tokens: Sequence[JustInterval]) -> list[Note]:
        notes = [start]
        for token in tokens:
            notes.append(notes[-1].shift(token.half_steps))
        return notes


class PitchClassRenderer(PitchRenderer):
    """
    Keeps every note inside the starting octave.

    Useful when the sequence is read as harmony changes rather than as a
    melody: octave placement is left to the player.
    """

    def render(self, start: Note, tokens: Sequence[JustInterval]) -> list[Note]:
        notes = [start]
        pitch_class = start.pitch_class
        for token in tokens:
            pitch_class = pitch_class.shift(token.half_steps)
            notes.append(Note(pitch_class, start.octave))
        return notes


def split_voices(notes: Sequence[Note]) -> tuple[list[Note], list[Note]]:
    """Alternate notes between two instruments: even indices, then odd ones."""
    return list(notes[0::2]), list(notes[1::2])
