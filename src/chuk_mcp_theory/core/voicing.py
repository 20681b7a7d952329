"""
Voice-leading optimizer.

Chooses the voicing of the next chord that moves the fewest semitones
from the previous one. Candidates are every inversion of the chord,
each tried an octave down, in place and an octave up, so the voicing
can settle near the previous chord instead of climbing every step.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from chuk_mcp_theory.constants import PITCH_MAX, PITCH_MIN, SEMITONES_PER_OCTAVE, ErrorMessages
from chuk_mcp_theory.core.chord import Chord, ChordQuality, _rotate, generate_chord
from chuk_mcp_theory.errors import RangeError

logger = logging.getLogger(__name__)

_OCTAVE_SHIFTS: tuple[int, ...] = (-SEMITONES_PER_OCTAVE, 0, SEMITONES_PER_OCTAVE)


@dataclass(frozen=True)
class VoicingResult:
    """The chosen voicing and its distance from the previous chord."""

    chord: Chord
    distance: int


def _notes_of(chord: Chord | Sequence[int]) -> list[int]:
    if isinstance(chord, Chord):
        return list(chord.notes)
    return sorted(chord)


def voice_leading_distance(a: Chord | Sequence[int], b: Chord | Sequence[int]) -> int:
    """
    Total semitone movement between two chords.

    Equal-size chords pair voices by ascending pitch order. Chords of
    different sizes pair greedily: the closest unused pair of notes is
    taken first (ties to the lower indices) until the smaller chord is
    used up; every note left over in the larger chord then counts its
    distance to the nearest note of the smaller one.

    Examples:
        voice_leading_distance([60, 64, 67], [60, 65, 69]) -> 3
        voice_leading_distance([60, 64, 67], [65, 69, 72]) -> 15
    """
    first = _notes_of(a)
    second = _notes_of(b)
    if not first or not second:
        return 0

    if len(first) == len(second):
        return sum(abs(x - y) for x, y in zip(first, second))

    smaller, larger = (first, second) if len(first) < len(second) else (second, first)
    pairs = sorted(
        (abs(s - l), i, j) for i, s in enumerate(smaller) for j, l in enumerate(larger)
    )

    used_small: set[int] = set()
    used_large: set[int] = set()
    total = 0
    for cost, i, j in pairs:
        if i in used_small or j in used_large:
            continue
        used_small.add(i)
        used_large.add(j)
        total += cost
        if len(used_small) == len(smaller):
            break

    for j, note in enumerate(larger):
        if j not in used_large:
            total += min(abs(note - s) for s in smaller)
    return total


def voicing_candidates(chord: Chord) -> list[tuple[Chord, int]]:
    """
    Every inversion of a chord at octave shifts -12, 0 and +12.

    Inversions are counted from the chord as given. Candidates with any
    note outside 0-127 are dropped.

    Returns:
        (candidate, shift) pairs, ordered by inversion then shift
    """
    candidates: list[tuple[Chord, int]] = []
    for steps in range(chord.size):
        notes, root = _rotate(chord.notes, chord.root, steps)
        inversion = (chord.inversion + steps) % chord.size
        for shift in _OCTAVE_SHIFTS:
            shifted = [p + shift for p in notes]
            if shifted[0] < PITCH_MIN or shifted[-1] > PITCH_MAX:
                continue
            if not PITCH_MIN <= root + shift <= PITCH_MAX:
                continue
            candidates.append(
                (Chord(root + shift, chord.quality, tuple(shifted), inversion), shift)
            )
    return candidates


def rank_voicings(previous: Chord | Sequence[int], chord: Chord) -> list[VoicingResult]:
    """
    Every candidate voicing of chord, best first.

    Candidates are ordered by voice_leading_distance from previous, then
    the lower inversion index, then the closer root-to-root interval, then
    the smaller octave shift. Candidates that tie on all four keep their
    enumeration order.
    """
    previous_notes = _notes_of(previous)
    if isinstance(previous, Chord):
        previous_root = previous.root
    else:
        previous_root = previous_notes[0] if previous_notes else chord.root

    scored: list[tuple[tuple[int, int, int, int], VoicingResult]] = []
    for candidate, shift in voicing_candidates(chord):
        distance = voice_leading_distance(previous_notes, candidate.notes)
        key = (distance, candidate.inversion, abs(candidate.root - previous_root), abs(shift))
        scored.append((key, VoicingResult(chord=candidate, distance=distance)))
    scored.sort(key=lambda item: item[0])
    return [result for _, result in scored]


def best_voicing_for(previous: Chord | Sequence[int], chord: Chord) -> VoicingResult:
    """
    Re-voice a chord for the smoothest move from previous.

    Takes the first of rank_voicings, so the choice is deterministic.

    Raises:
        RangeError: No candidate voicing fits within 0-127
    """
    ranked = rank_voicings(previous, chord)
    if not ranked:
        raise RangeError(ErrorMessages.NO_VOICING.format(value=chord.symbol), chord.notes)

    best = ranked[0]
    logger.debug(
        "Voiced %s as %s (inversion %d, distance %d) after %s",
        chord.symbol,
        list(best.chord.notes),
        best.chord.inversion,
        best.distance,
        _notes_of(previous),
    )
    return best


def best_voicing(
    previous: Chord | Sequence[int], next_root: int, next_quality: ChordQuality | str
) -> VoicingResult:
    """
    Build the next chord and voice it against the previous one.

    Args:
        previous: The chord being left (Chord or list of pitches)
        next_root: Root pitch of the next chord (0-127)
        next_quality: Chord quality identifier of the next chord

    Returns:
        VoicingResult with the chosen chord and its total distance

    Raises:
        UnknownChordError: Unknown quality
        RangeError: Root-position chord or every candidate leaves 0-127
    """
    return best_voicing_for(previous, generate_chord(next_root, next_quality))
