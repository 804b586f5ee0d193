from projectquota.errors import (
    AdmissionError,
    DependencyError,
    NotFoundError,
    ParseError,
    QuotaExceededError,
)
from projectquota.fit import QuotaFitChecker, fits
from projectquota.limits import LimitSet
from projectquota.quantity import Quantity
from projectquota.resources import Namespace, Project
from projectquota.store import KubernetesStore, MemoryStore
from projectquota.validation import Operation, validate

__version__ = "0.1.0"
