"""
Splits statement lines into one block of raw lines per transaction.

Segmentation is a fold: ``step`` takes the state after the previous line and
returns the state after the current one, so nothing is shared between
documents.
"""

from dataclasses import dataclass, replace
from functools import reduce
from typing import Iterable, List, Tuple

from mutex.issuers import PAGE_NUMBER, IssuerProfile


@dataclass(frozen=True)
class SegmentState:
    in_section: bool = False
    # anchor-opened sections cannot reopen once an end marker was seen
    closed: bool = False
    current: Tuple[str, ...] = ()
    blocks: Tuple[Tuple[str, ...], ...] = ()

    def flush(self) -> "SegmentState":
        if not self.current:
            return self
        return replace(self, current=(), blocks=self.blocks + (self.current,))


def is_noise(line: str, profile: IssuerProfile, markers: bool = True) -> bool:
    """
    Header, footer or legal text. Transaction rows pass ``markers=False``:
    their descriptions may quote a marker phrase, so only the anchored
    patterns apply to them.
    """
    if PAGE_NUMBER.match(line):
        return True
    if markers and any(marker in line for marker in profile.noise_markers):
        return True
    return any(pattern.search(line) for pattern in profile.noise_patterns)


def step(state: SegmentState, line: str, profile: IssuerProfile) -> SegmentState:
    trimmed = line.strip()
    if not trimmed:
        return state

    if any(marker.search(trimmed) for marker in profile.end_markers):
        closed = state.in_section or state.closed
        return replace(state.flush(), in_section=False, closed=closed)

    if any(marker.search(trimmed) for marker in profile.start_markers):
        return replace(state.flush(), in_section=True)

    anchored = profile.date_anchor.match(trimmed) is not None
    if is_noise(trimmed, profile, markers=not anchored):
        return state

    if anchored:
        opens = not profile.start_markers and not state.closed
        if state.in_section or opens:
            return replace(state.flush(), in_section=True, current=(trimmed,))
        return state

    if state.in_section and state.current:
        return replace(state, current=state.current + (trimmed,))

    return state


def segment_blocks(lines: Iterable[str], profile: IssuerProfile) -> List[List[str]]:
    final = reduce(lambda state, line: step(state, line, profile), lines, SegmentState())
    return [list(block) for block in final.flush().blocks]
