from .pass_record import PassRecord
from .recorder import PassRecorder, nodes_frame, links_frame

__all__ = ["PassRecord", "PassRecorder", "nodes_frame", "links_frame"]
