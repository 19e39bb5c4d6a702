"""justdrift CLI entry point."""

import logging
import sys
from collections.abc import Sequence

import click

from justdrift import __version__
from justdrift.drift import DEFAULT_MAX_ITERATIONS, to_cents
from justdrift.errors import DriftError
from justdrift.interval_search import BracketExclusion, IntervalSearch
from justdrift.intervals import IntervalVector
from justdrift.midi_exporter import MidiExporter
from justdrift.notes import Note
from justdrift.pitch_renderer import (
    ChromaticPitchRenderer,
    PitchClassRenderer,
    PitchRenderer,
    split_voices,
)
from justdrift.sequence_builder import SequenceBuilder

NOTES_PER_ROW = 20


def _get_renderer(name: str) -> PitchRenderer:
    """Return the PitchRenderer for the requested name."""
    if name == "pitch-class":
        return PitchClassRenderer()
    return ChromaticPitchRenderer()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _echo_vector(label: str, vector: IntervalVector, indent: str = "   ") -> None:
    tokens = vector.expand()
    click.echo(f"{indent}{label}")
    click.echo(
        f"{indent}   Number of half steps: {vector.half_steps:10} = "
        + "".join(f"{token.half_steps:4}" for token in tokens)
    )
    click.echo(
        f"{indent}   Frequency scaling:    {str(vector.ratio):>10} = "
        + "".join(f"{str(token.ratio):>5}" for token in tokens)
    )


def _echo_notes(heading: str, notes: Sequence[Note]) -> None:
    click.echo(f"{heading}:")
    for start in range(0, len(notes), NOTES_PER_ROW):
        row = notes[start:start + NOTES_PER_ROW]
        click.echo("  " + " ".join(str(note) for note in row))


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="justdrift")
def main() -> None:
    """justdrift — just-intonation interval sequences that drift in tuning."""


# ── search subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.option(
    "--half-steps",
    type=int,
    default=0,
    show_default=True,
    help="Net number of half steps the sequence must span.",
)
@click.option(
    "--freq-scale",
    type=float,
    default=1.0,
    show_default=True,
    help="Target frequency scaling of the whole sequence (must be positive).",
)
@click.option(
    "--freq-scale-err",
    type=float,
    default=1.0,
    show_default=True,
    metavar="CENTS",
    help="Allowed error of --freq-scale in cents (1/100 half step).",
)
@click.option(
    "--starting-note",
    default="C",
    show_default=True,
    help="Name of the first note, e.g. C, F# or Bb.",
)
@click.option(
    "--starting-octave",
    type=int,
    default=3,
    show_default=True,
    help="Octave of the first note (C4 = middle C).",
)
@click.option(
    "--split/--no-split",
    default=False,
    show_default=True,
    help="Alternate the notes between two instruments.",
)
@click.option(
    "--renderer",
    type=click.Choice(["chromatic", "pitch-class"], case_sensitive=False),
    default="chromatic",
    show_default=True,
    help="chromatic: walk the keyboard across octaves. pitch-class: stay in the starting octave.",
)
@click.option(
    "--exclusion",
    type=click.Choice([rule.value for rule in BracketExclusion], case_sensitive=False),
    default=BracketExclusion.COMPONENTWISE.value,
    show_default=True,
    help=(
        "How the upward drift vector must differ from the downward one. "
        "componentwise: every coefficient differs from the inverse. "
        "negation: only the exact inverse is rejected. "
        "With the built-in generators both rules pick (-2, 3, -1)."
    ),
)
@click.option(
    "--max-radius",
    type=click.IntRange(min=1),
    default=IntervalSearch.DEFAULT_MAX_RADIUS,
    show_default=True,
    help="Largest coefficient shell examined by the searches.",
)
@click.option(
    "--max-iterations",
    type=click.IntRange(min=0),
    default=DEFAULT_MAX_ITERATIONS,
    show_default=True,
    help="Maximum number of drift vectors added before giving up.",
)
@click.option(
    "--midi",
    "midi_output",
    default=None,
    metavar="PATH",
    help="Also write the note sequence to this MIDI file.",
)
@click.option(
    "--tempo",
    type=click.IntRange(20, 300),
    default=MidiExporter.DEFAULT_TEMPO,
    show_default=True,
    help="Playback tempo of the MIDI file in BPM.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every search and drift step.")
def search(
    half_steps: int,
    freq_scale: float,
    freq_scale_err: float,
    starting_note: str,
    starting_octave: int,
    split: bool,
    renderer: str,
    exclusion: str,
    max_radius: int,
    max_iterations: int,
    midi_output: str | None,
    tempo: int,
    verbose: bool,
) -> None:
    """
    Search for a just interval sequence that drifts in tuning.

    The sequence spans --half-steps on the keyboard while its exact frequency
    ratio ends within --freq-scale-err cents of --freq-scale.

    \b
    Examples:
      justdrift search --half-steps 0 --freq-scale 1.5
      justdrift search --half-steps 7 --freq-scale 1.0 --freq-scale-err 0.5 --split
      justdrift search --half-steps 12 --freq-scale 2.01 --midi drift.mid
    """
    _configure_logging(verbose)

    click.echo(f"justdrift v{__version__}")
    click.echo("Starting out-of-tune sequence search with:")
    click.echo(f"   Number of half steps:      {half_steps:10}")
    click.echo(f"   Target frequency scaling:  {freq_scale:10.3f}")
    click.echo(f"   Max scaling error (cents): {freq_scale_err:10.3f}")
    click.echo(f"   Starting note and octave   {starting_note:>9}{starting_octave:1}")
    click.echo(f"   Split note sequence        {str(split):>10}")
    click.echo()

    try:
        start = Note.parse(starting_note, starting_octave)
        builder = SequenceBuilder(
            max_radius=max_radius,
            max_iterations=max_iterations,
            exclusion=BracketExclusion(exclusion.lower()),
        )
        sequence = builder.build(half_steps, freq_scale, freq_scale_err)
    except DriftError as exc:
        click.echo(f"  ERROR: {exc}", err=True)
        sys.exit(1)

    click.echo("Half step satisfying sequence:")
    _echo_vector(f"Vector {sequence.base}", sequence.base, indent="")
    click.echo()
    click.echo("Scaling sequences:")
    _echo_vector(f"Downscaling {sequence.down}", sequence.down)
    _echo_vector(f"Upscaling {sequence.up}", sequence.up)
    click.echo()

    result = sequence.result
    click.echo("Found sequence:")
    click.echo(f"   Vector:                {result.vector}")
    click.echo(f"   Drift steps:           {result.steps}")
    tokens = sequence.tokens
    downward = sum(1 for token in tokens if token.is_inverted)
    click.echo(f"   Number of intervals:   {len(tokens)} ({len(tokens) - downward} up, {downward} down)")
    click.echo(f"   Keyboard distance:     {result.vector.absolute_half_steps} half steps")
    click.echo(f"   Scaling frequency:     {float(sequence.ratio)}")
    click.echo(f"   Scaling (cents):       {to_cents(sequence.ratio):.3f}")
    click.echo(f"   Scaling error (cents): {result.error_cents}")
    click.echo()

    notes = _get_renderer(renderer.lower()).render(start, sequence.tokens)
    _echo_notes("List of notes that correspond to the interval sequence", notes)

    if split:
        first, second = split_voices(notes)
        click.echo()
        _echo_notes("Instrument 1", first)
        click.echo()
        _echo_notes("Instrument 2", second)

    if midi_output is not None:
        click.echo()
        click.echo(f"Writing MIDI file → '{midi_output}'...")
        exporter = MidiExporter(tempo=tempo)
        try:
            exporter.export(notes, midi_output, split=split)
        except OSError as exc:
            click.echo(f"  ERROR: Could not write MIDI file — {exc}", err=True)
            sys.exit(1)
        except ValueError as exc:
            click.echo(f"  ERROR: {exc}", err=True)
            sys.exit(1)


# ── bracket subcommand ─────────────────────────────────────────────────────────

@main.command()
@click.option(
    "--exclusion",
    type=click.Choice([rule.value for rule in BracketExclusion], case_sensitive=False),
    default=BracketExclusion.COMPONENTWISE.value,
    show_default=True,
    help="How the upward drift vector must differ from the downward one.",
)
@click.option(
    "--max-radius",
    type=click.IntRange(min=1),
    default=IntervalSearch.DEFAULT_MAX_RADIUS,
    show_default=True,
    help="Largest coefficient shell examined by the search.",
)
def bracket(exclusion: str, max_radius: int) -> None:
    """Show the zero-half-step vectors used to drift the tuning down and up."""
    search_ = IntervalSearch(max_radius=max_radius, exclusion=BracketExclusion(exclusion.lower()))
    try:
        down, up = search_.find_drift_bracket()
    except DriftError as exc:
        click.echo(f"  ERROR: {exc}", err=True)
        sys.exit(1)

    for label, vector in (("Down", down), ("Up", up)):
        click.echo(
            f"{label:<5} {str(vector):<14} ratio {str(vector.ratio):>10}  "
            f"({to_cents(vector.ratio):+.3f} cents, {vector.num_intervals} intervals, "
            f"{vector.absolute_half_steps} half steps travelled)"
        )
