"""Protocol layer: frame boundaries, message parsing and serialization."""

from .framing import frame_count, split_frames
from .receive import parse_receivemidi, parse_receivemidi_line
