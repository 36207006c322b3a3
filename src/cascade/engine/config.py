"""Configuration for the schedule engine."""

from pydantic import BaseModel


class EngineConfig(BaseModel):
    """Options controlling graph construction and persistence."""

    # Drop edges whose predecessor is not part of the run (archived, deleted,
    # other project). When False they count toward in-degree and the successor
    # is left unscheduled.
    ignore_external_predecessors: bool = False

    # Compute and report updates without writing them to the store
    dry_run: bool = False
