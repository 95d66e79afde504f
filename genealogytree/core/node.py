"""Tree node model for genealogytree.

Two families of nodes live here:

- DomainNode: the member tree as returned by the backend, nullable at
  any position.
- DisplayNode: the transformer output, a tagged union of EmptyNode and
  OccupiedNode that always keeps a binary shape.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Tuple, Union

from ..config import Position, RankTier


# Aggregate fields: attribute name -> backend key
COUNT_FIELDS = {
    'left_team_count': 'leftTeamCount',
    'right_team_count': 'rightTeamCount',
    'left_leg_stars': 'leftLegStars',
    'right_leg_stars': 'rightLegStars',
    'left_complete_active': 'leftCompleteActive',
    'left_complete_inactive': 'leftCompleteInactive',
    'right_complete_active': 'rightCompleteActive',
    'right_complete_inactive': 'rightCompleteInactive',
}

VOLUME_FIELDS = {
    'left_leg_bv': 'leftLegBV',
    'right_leg_bv': 'rightLegBV',
}

# Optional profile fields carried through untouched
PROFILE_FIELDS = {
    'avatar': 'avatar',
    'profile_image': 'profileImage',
    'joining_date': 'joiningDate',
    'total_downline': 'totalDownline',
    'parent_id': 'parentId',
    'direct_sponsors': 'directSponsors',
    'status': 'status',
}


def _as_count(value: Any) -> int:
    if value is None:
        return 0
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Not a numeric count: {value!r}")
    if not number.is_finite() or number != number.to_integral_value():
        raise ValueError(f"Not a whole count: {value!r}")
    return int(number)


def _as_volume(value: Any) -> Decimal:
    if value is None:
        return Decimal(0)
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Not a numeric volume: {value!r}")


def _derive_active(payload: Dict[str, Any]) -> bool:
    """Explicit isActive wins; otherwise fall back to the status string."""
    explicit = payload.get('isActive')
    if explicit is not None:
        return bool(explicit)
    status = payload.get('status')
    if status is None:
        return False
    return str(status).lower() == 'active'


@dataclass
class LegMetrics:
    """Aggregated business metrics of both legs under a member."""

    left_team_count: int = 0
    right_team_count: int = 0
    left_leg_bv: Decimal = Decimal(0)
    right_leg_bv: Decimal = Decimal(0)
    left_leg_stars: int = 0
    right_leg_stars: int = 0
    left_complete_active: int = 0
    left_complete_inactive: int = 0
    right_complete_active: int = 0
    right_complete_inactive: int = 0

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "LegMetrics":
        values = {name: _as_count(payload.get(key)) for name, key in COUNT_FIELDS.items()}
        values.update(
            {name: _as_volume(payload.get(key)) for name, key in VOLUME_FIELDS.items()}
        )
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {key: getattr(self, name) for name, key in COUNT_FIELDS.items()}
        data.update({key: getattr(self, name) for name, key in VOLUME_FIELDS.items()})
        return data


@dataclass
class MemberProfile:
    """Optional descriptive fields; None when the backend omits them."""

    avatar: Optional[str] = None
    profile_image: Optional[str] = None
    joining_date: Optional[str] = None
    total_downline: Optional[int] = None
    parent_id: Optional[str] = None
    direct_sponsors: Optional[int] = None
    status: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "MemberProfile":
        return cls(**{name: payload.get(key) for name, key in PROFILE_FIELDS.items()})

    def to_dict(self) -> Dict[str, Any]:
        return {
            key: getattr(self, name)
            for name, key in PROFILE_FIELDS.items()
            if getattr(self, name) is not None
        }


@dataclass
class DomainNode:
    """A member of the downline as delivered by the backend.

    Children are plain Optional references; a missing child means the
    slot is empty or lies beyond the fetched depth.
    """

    member_id: str
    full_name: str
    rank: str = ''
    position: Optional[Position] = None
    is_active: bool = False
    metrics: LegMetrics = field(default_factory=LegMetrics)
    profile: MemberProfile = field(default_factory=MemberProfile)
    left: Optional["DomainNode"] = None
    right: Optional["DomainNode"] = None

    @classmethod
    def from_dict(
        cls,
        payload: Optional[Dict[str, Any]],
        position: Position = Position.ROOT
    ) -> Optional["DomainNode"]:
        """Build a DomainNode tree from backend JSON.

        Only null checks are performed; a payload of the wrong shape
        surfaces as KeyError/TypeError, and a count that is not a whole
        number as ValueError.

        Args:
            payload: Decoded JSON object for the node, or None
            position: Slot used when the payload has no position key

        Returns:
            The parsed node, or None when payload is None
        """
        if payload is None:
            return None
        return cls(
            member_id=str(payload['memberId']),
            full_name=payload.get('fullName') or '',
            rank=payload.get('rank') or '',
            position=Position.parse(payload.get('position'), position),
            is_active=_derive_active(payload),
            metrics=LegMetrics.from_dict(payload),
            profile=MemberProfile.from_dict(payload),
            left=cls.from_dict(payload.get('left'), Position.LEFT),
            right=cls.from_dict(payload.get('right'), Position.RIGHT),
        )


@dataclass(frozen=True)
class EmptyNode:
    """Placeholder for a binary slot with no member assigned."""

    position: Position
    is_empty = True

    def to_dict(self) -> Dict[str, Any]:
        return {'isEmpty': True, 'position': self.position.value}


@dataclass(frozen=True)
class OccupiedNode:
    """A member slot in the display tree.

    children is either None (leaf at this fetch depth) or exactly two
    DisplayNodes, left then right.
    """

    member_id: str
    full_name: str
    rank: str
    position: Position
    is_active: bool
    metrics: LegMetrics
    profile: MemberProfile
    children: Optional[Tuple["DisplayNode", "DisplayNode"]] = None
    is_empty = False

    def __post_init__(self):
        if self.children is not None and len(self.children) != 2:
            raise ValueError(
                f"Display node {self.member_id} must have 0 or 2 children, "
                f"got {len(self.children)}"
            )

    @property
    def name(self) -> str:
        return self.full_name

    @property
    def has_children(self) -> bool:
        return self.children is not None

    @property
    def initials(self) -> str:
        """Up to two upper-case initials taken from the full name."""
        words = self.full_name.split()
        return ''.join(word[0] for word in words[:2]).upper()

    @property
    def rank_tier(self) -> RankTier:
        return RankTier.classify(self.rank)

    @property
    def avatar_url(self) -> Optional[str]:
        return self.profile.profile_image or self.profile.avatar

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation; 'children' is omitted for leaves."""
        data: Dict[str, Any] = {
            'isEmpty': False,
            'memberId': self.member_id,
            'fullName': self.full_name,
            'rank': self.rank,
            'position': self.position.value,
            'isActive': self.is_active,
        }
        data.update({key: str(value) if isinstance(value, Decimal) else value
                     for key, value in self.metrics.to_dict().items()})
        data.update(self.profile.to_dict())
        if self.children is not None:
            data['children'] = [child.to_dict() for child in self.children]
        return data


DisplayNode = Union[EmptyNode, OccupiedNode]
