"""Speaker-turn segmentation and policy application.

WHY: Diarized Deepgram words carry a speaker number and a per-word
speaker confidence. Subtitles want one block per speaker turn, without
the low-confidence noise, split fragments and stray extra speakers
that raw diarization produces.

HOW: Two passes.
  speaker_segments() — filters words by speaker_confidence and groups
                       the survivors into chronological same-speaker runs
  apply_policy()     — merges adjacent same-speaker segments, drops
                       segments shorter than the minimum duration, then
                       keeps only the first N speakers to appear

RULES:
- All functions are pure: inputs are never mutated
- Segment confidence = mean speaker_confidence of its words
- Policy order is fixed: merge -> duration filter -> speaker cap.
  Merging first lets several short fragments survive as one segment
- The speaker cap ranks speakers by first appearance in the list handed
  to apply_policy (before merging or filtering); excess speakers are
  dropped, not folded into an "other" bucket
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Set

from deepgram_converter.core.ir import SpeakerPolicy, SpeakerSegment, Word


def speaker_segments(
    words_with_speaker_info: Sequence[Word],
    min_confidence: float,
) -> List[SpeakerSegment]:
    """Group confident diarized words into chronological speaker segments.

    Args:
        words_with_speaker_info: Words carrying speaker and speaker_confidence.
        min_confidence: Words below this speaker_confidence are ignored.

    Returns:
        SpeakerSegment list ordered by the start of each segment's first word.
    """
    confident = [
        w for w in words_with_speaker_info
        if w.speaker_confidence is not None and w.speaker_confidence >= min_confidence
    ]
    confident.sort(key=lambda w: w.start_raw)

    runs: List[List[Word]] = []
    for word in confident:
        if runs and runs[-1][0].speaker == word.speaker:
            runs[-1].append(word)
        else:
            runs.append([word])

    return [_segment_from_words(run) for run in runs]


def _segment_from_words(words: List[Word]) -> SpeakerSegment:
    confidences = [w.speaker_confidence for w in words]
    return SpeakerSegment(
        speaker_id=words[0].speaker,
        text=" ".join(w.text for w in words),
        start=words[0].start_raw,
        end=words[-1].end_raw,
        confidence=sum(confidences) / len(confidences),
        word_count=len(words),
    )


def speaker_statistics(words_with_speaker_info: Sequence[Word]) -> Dict[str, Any]:
    """Per-speaker word counts and average confidence, without filtering."""
    per_speaker: Dict[int, List[float]] = {}
    for word in words_with_speaker_info:
        if word.speaker is None or word.speaker_confidence is None:
            continue
        per_speaker.setdefault(word.speaker, []).append(word.speaker_confidence)

    speakers = {
        speaker_id: {
            "word_count": len(values),
            "avg_confidence": sum(values) / len(values),
        }
        for speaker_id, values in per_speaker.items()
    }
    all_values = [v for values in per_speaker.values() for v in values]

    return {
        "speaker_count": len(speakers),
        "total_words_with_speaker_data": len(all_values),
        "speakers": speakers,
        "overall_avg_confidence": sum(all_values) / len(all_values) if all_values else 0.0,
    }


def count_unique_speakers(words_with_speaker_info: Sequence[Word], min_confidence: float) -> int:
    """Number of distinct speakers left after confidence filtering."""
    return len({s.speaker_id for s in speaker_segments(words_with_speaker_info, min_confidence)})


def merge_consecutive(segments: Sequence[SpeakerSegment]) -> List[SpeakerSegment]:
    """Fold adjacent segments that share a speaker_id into one.

    Confidence of a merged segment is the word-count-weighted mean.
    """
    merged: List[SpeakerSegment] = []
    for segment in segments:
        if merged and merged[-1].speaker_id == segment.speaker_id:
            previous = merged[-1]
            total_words = previous.word_count + segment.word_count
            if total_words:
                confidence = (
                    previous.confidence * previous.word_count
                    + segment.confidence * segment.word_count
                ) / total_words
            else:
                confidence = (previous.confidence + segment.confidence) / 2
            merged[-1] = SpeakerSegment(
                speaker_id=previous.speaker_id,
                text="{} {}".format(previous.text, segment.text),
                start=min(previous.start, segment.start),
                end=max(previous.end, segment.end),
                confidence=confidence,
                word_count=total_words,
            )
        else:
            merged.append(SpeakerSegment(
                speaker_id=segment.speaker_id,
                text=segment.text,
                start=segment.start,
                end=segment.end,
                confidence=segment.confidence,
                word_count=segment.word_count,
            ))
    return merged


def filter_short_segments(
    segments: Sequence[SpeakerSegment],
    min_duration: float,
) -> List[SpeakerSegment]:
    return [s for s in segments if s.end - s.start >= min_duration]


def first_speakers(segments: Sequence[SpeakerSegment], max_speakers: int) -> Set[int]:
    """The first ``max_speakers`` distinct speaker ids, in list order."""
    ordered: List[int] = []
    for segment in segments:
        if segment.speaker_id not in ordered:
            ordered.append(segment.speaker_id)
        if len(ordered) >= max_speakers:
            break
    return set(ordered)


def cap_speakers(
    segments: Sequence[SpeakerSegment],
    allowed: Set[int],
) -> List[SpeakerSegment]:
    return [s for s in segments if s.speaker_id in allowed]


def apply_policy(
    segments: Sequence[SpeakerSegment],
    policy: SpeakerPolicy,
) -> List[SpeakerSegment]:
    """Merge, duration-filter and speaker-cap segments, in that order.

    Args:
        segments: Output of speaker_segments(), chronologically ordered.
        policy: The speaker rendering policy.

    Returns:
        A new list; the input segments are left untouched.
    """
    allowed = first_speakers(segments, policy.max_speakers)

    result = list(segments)
    if policy.merge_consecutive_segments:
        result = merge_consecutive(result)
    result = filter_short_segments(result, policy.min_segment_duration)
    return cap_speakers(result, allowed)
