"""
Export board runs to JSONL.

- First line: board metadata
- Following lines: one frame per line

The export is a write-only trace; sessions are never restored from it.
"""

import json
from typing import TYPE_CHECKING

from .formats import format_frame, format_session_header

if TYPE_CHECKING:
    from galton.board.session import BoardSession


def export_session(session: "BoardSession", num_frames: int, output_path: str) -> None:
    """
    Tick a session and write every frame to a JSONL file.

    Args:
        session: The board session to run
        num_frames: Number of frames to simulate and export
        output_path: Path to the output JSONL file
    """
    with open(output_path, 'w') as f:
        header = format_session_header(session.seed, session.spawner.interval)
        f.write(json.dumps(header) + '\n')

        for frame_num in range(num_frames):
            session.tick()
            f.write(json.dumps(format_frame(session.scene, frame_num + 1)) + '\n')


def export_to_dict(session: "BoardSession", num_frames: int) -> list:
    """
    Same as export_session, collected into a list (for testing).

    Returns:
        List of dicts, first is header, rest are frames
    """
    result = [format_session_header(session.seed, session.spawner.interval)]
    for frame_num in range(num_frames):
        session.tick()
        result.append(format_frame(session.scene, frame_num + 1))
    return result
