from collections.abc import Mapping

from projectquota.errors import ParseError
from projectquota.quantity import Quantity

# Quota limit fields as they appear on the platform API, keyed to the
# resource names they constrain.
FIELD_RESOURCE_NAMES = {
    "pods": "pods",
    "services": "services",
    "replicationControllers": "replicationcontrollers",
    "secrets": "secrets",
    "configMaps": "configmaps",
    "persistentVolumeClaims": "persistentvolumeclaims",
    "servicesNodePorts": "services.nodeports",
    "servicesLoadBalancers": "services.loadbalancers",
    "requestsCpu": "requests.cpu",
    "requestsMemory": "requests.memory",
    "requestsStorage": "requests.storage",
    "limitsCpu": "limits.cpu",
    "limitsMemory": "limits.memory",
}


def resource_name(field):
    return FIELD_RESOURCE_NAMES.get(field, field)


class LimitSet(Mapping):
    """An immutable mapping of resource name to Quantity.

    Resources that are not declared read as zero through ``get``; they are
    never treated as unbounded.
    """

    __slots__ = ("_limits",)

    def __init__(self, limits=None):
        parsed = {}
        for key, value in (limits or {}).items():
            if value is None:
                continue
            try:
                parsed[key] = Quantity.parse(value)
            except ParseError as exc:
                raise ParseError(value, key=key) from exc
        self._limits = parsed

    @classmethod
    def from_limit(cls, limit):
        """Build from an API limit object, translating its field names."""
        if limit is None:
            return cls()
        return cls({resource_name(field): value for field, value in limit.items()})

    @classmethod
    def from_quota(cls, quota):
        """Build from a ``{"limit": {...}}`` quota object, or None if unset."""
        if quota is None:
            return None
        return cls.from_limit(quota.get("limit"))

    @classmethod
    def sum(cls, limit_sets):
        totals = {}
        for limit_set in limit_sets:
            for key, quantity in limit_set.items():
                totals[key] = totals.get(key, Quantity.zero()) + quantity
        return cls(totals)

    def get(self, key, default=None):
        if key in self._limits:
            return self._limits[key]
        if default is not None:
            return default
        return Quantity.zero()

    def __getitem__(self, key):
        return self._limits[key]

    def __iter__(self):
        return iter(self._limits)

    def __len__(self):
        return len(self._limits)

    def __add__(self, other):
        if not isinstance(other, LimitSet):
            return NotImplemented
        return LimitSet.sum([self, other])

    def __eq__(self, other):
        if not isinstance(other, LimitSet):
            return NotImplemented
        keys = set(self) | set(other)
        return all(self.get(key) == other.get(key) for key in keys)

    __hash__ = None

    def __repr__(self):
        items = ", ".join(f"{k}={v}" for k, v in sorted(self._limits.items()))
        return f"LimitSet({items})"

    def to_dict(self):
        return {key: str(quantity) for key, quantity in self._limits.items()}


def get(limit_set, key):
    return limit_set.get(key)


def keys(limit_set):
    return set(limit_set.keys())
