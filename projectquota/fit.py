import logging
from dataclasses import dataclass, field
from typing import List, Optional

from projectquota.limits import LimitSet

log = logging.getLogger(__name__)


@dataclass
class Result:
    status: bool
    resources: List[str] = field(default_factory=list)
    detail: Optional[str] = None


class QuotaFitChecker:
    """Checks that a candidate namespace quota keeps its project within cap.

    Only resources the project caps are constrained. Every capped resource is
    evaluated so the detail lists all of the overruns at once.
    """

    message = "Namespace quotas should fit within the project quota."

    def __init__(self):
        self.result = None

    def check(self, candidate: LimitSet, siblings, cap: LimitSet):
        self.result = Result(status=True)
        if not cap or not candidate:
            return self.result.status, self.result.detail

        committed = LimitSet.sum(list(siblings) + [candidate])
        offenders = []
        for key in sorted(cap.keys()):
            used = committed.get(key)
            if used > cap[key]:
                log.debug("%s over cap: committed %s, cap %s", key, used, cap[key])
                offenders.append((key, used, cap[key]))

        if offenders:
            self.result = Result(
                status=False,
                resources=[key for key, _, _ in offenders],
                detail=", ".join(
                    f"{key} (committed {used}, cap {limit})"
                    for key, used, limit in offenders
                ),
            )
        return self.result.status, self.result.detail


def fits(candidate, siblings, cap):
    return QuotaFitChecker().check(candidate, siblings, cap)
