"""Party composites, their library, and the split/merge orchestrator."""

from muster.core.party.follow import FollowLeader
from muster.core.party.library import PartyLibrary, SavedFormation, SavedPartyConfig
from muster.core.party.models import (
    DeploymentPlan,
    MemberPlacement,
    MemberRecord,
    PartyComposite,
)
from muster.core.party.orchestrator import SAVED_FORMATION_KEY, PartyOrchestrator, capture_offset

__all__ = [
    "SAVED_FORMATION_KEY",
    "DeploymentPlan",
    "FollowLeader",
    "MemberPlacement",
    "MemberRecord",
    "PartyComposite",
    "PartyLibrary",
    "PartyOrchestrator",
    "SavedFormation",
    "SavedPartyConfig",
    "capture_offset",
]
