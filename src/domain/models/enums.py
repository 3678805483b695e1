"""Domain enumerations for the student records layer.

String-valued enums use the str mixin so they serialize cleanly to JSON
and remain comparable to plain strings.
"""

from enum import Enum


class TrackingMode(str, Enum):
    """Whether materialized entities are wired for in-place update.

    NO_TRACKING is the read path: results are detached instances, and mutating
    them never reaches the store. TRACKED results are the session's own
    instances and are saved by the next commit.
    """

    NO_TRACKING = "no_tracking"
    TRACKED = "tracked"
