"""MidiExporter: Writes a rendered note sequence to a MIDI file."""

from collections.abc import Sequence

from midiutil import MIDIFile

from justdrift.notes import Note

# In midiutil Format 1 MIDI, track 0 is the conductor/tempo track.
# Note data written to track 0 is ignored by most players and notation apps.
TRACK_CONDUCTOR = 0  # Tempo only — never receives notes
FIRST_VOICE_TRACK = 1


class MidiExporter:
    """
    Writes a note sequence as a Format 1 MIDI file, one track per instrument.

    Track layout
    ------------
    Track 0 — conductor track (tempo only, no notes)

    Track 1 — "Instrument 1"
        The whole sequence, or the even-indexed notes when split.

    Track 2 — "Instrument 2"  (only when split)
        The odd-indexed notes. Split instruments hand the line back and forth,
        so each note keeps its position in the full sequence and sounds until
        the next note of the same instrument starts.

    Timing
    ------
    Note ``i`` of the full sequence starts at beat ``i × note_beats``.
    """

    DEFAULT_TEMPO = 100    # BPM
    DEFAULT_VELOCITY = 80  # MIDI note-on velocity (0-127)
    DEFAULT_NOTE_BEATS = 1.0

    def __init__(
        self,
        tempo: int = DEFAULT_TEMPO,
        velocity: int = DEFAULT_VELOCITY,
        note_beats: float = DEFAULT_NOTE_BEATS,
    ) -> None:
        """
        Args:
            tempo:      Playback tempo in beats per minute.
            velocity:   MIDI note-on velocity for every note.
            note_beats: Length of one sequence step in beats.
        """
        self.tempo = tempo
        self.velocity = velocity
        self.note_beats = note_beats

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _voice_positions(self, count: int, split: bool) -> list[list[int]]:
        """Indices into the full sequence owned by each instrument."""
        if not split:
            return [list(range(count))]
        return [list(range(0, count, 2)), list(range(1, count, 2))]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def export(self, notes: Sequence[Note], output_path: str, split: bool = False) -> None:
        """
        Render notes to a Standard MIDI File.

        Args:
            notes:       Ordered notes, usually from a PitchRenderer.
            output_path: Destination file path (e.g. "drift.mid").
            split:       Alternate notes between two instrument tracks.

        Raises:
            ValueError: If a note lies outside the MIDI range 0-127.
            OSError: If the output file cannot be opened for writing.
        """
        for note in notes:
            if not 0 <= note.midi_number <= 127:
                raise ValueError(f"Note {note} is outside the MIDI range; choose another starting octave.")

        voices = self._voice_positions(len(notes), split)
        midi = MIDIFile(numTracks=FIRST_VOICE_TRACK + len(voices), removeDuplicates=False, deinterleave=False)
        midi.addTempo(TRACK_CONDUCTOR, 0, self.tempo)

        for voice_no, positions in enumerate(voices):
            track = FIRST_VOICE_TRACK + voice_no
            midi.addTrackName(track, 0, f"Instrument {voice_no + 1}")
            step = len(voices)
            for position in positions:
                midi.addNote(
                    track=track,
                    channel=voice_no,
                    pitch=notes[position].midi_number,
                    time=position * self.note_beats,
                    duration=step * self.note_beats,
                    volume=self.velocity,
                )

        with open(output_path, "wb") as f:
            midi.writeFile(f)
