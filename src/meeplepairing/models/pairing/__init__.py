from meeplepairing.models.pairing.pairing_result import PlannedMatch, RoundPlan

__all__ = ["PlannedMatch", "RoundPlan"]
