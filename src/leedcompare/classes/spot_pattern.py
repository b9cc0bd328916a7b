"""Module spot_pattern of leedcompare.classes.

Defines the SpotPattern class, which holds information on the beams
of a LEED pattern: their (h, k) indices, the groups of symmetry-
equivalent beams, and whether beams are superstructure beams.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

from collections import defaultdict
import re

from quicktions import Fraction

from leedcompare.errors import LEEDCompareError

# Group of beams whose symmetry equivalence is not known
UNKNOWN_GROUP = None

_GROUP_RE = re.compile(r'\[(?P<group>[^\]]*)\]')
_HK_SEPARATORS_RE = re.compile(r'[,;_|\s]+')
_HK_EPS = 0.01  # Tolerance for matching beams by their indices


class SpotPatternError(LEEDCompareError):
    """Inconsistent or insufficient information on beams."""


def _to_fraction(index, maxdenom=99):
    """Return a Fraction from a string like '1/2', '-1', or '0.5'."""
    if '/' in index:
        numerator, denominator = index.split('/')
        return Fraction(int(numerator), int(denominator))
    return Fraction(float(index)).limit_denominator(maxdenom)


def _format_index(index):
    """Return a string for one component of a beam index."""
    return str(index)


class SpotPattern:
    """The beams of a LEED pattern.

    Beams are identified by their position in the pattern (the
    'beam index' or 'beam_id'). This is the index used as an
    identifier by IVDataset objects.

    Attributes
    ----------
    hks : tuple
        Each element is a pair of Fractions, (h, k).
    groups : tuple
        For each beam, the integer identifying the group of beams
        that are symmetry-equivalent. Negative values are used for
        symmetry-forbidden beams. UNKNOWN_GROUP if not known.
    """

    def __init__(self, hks, groups=None):
        """Initialize instance.

        Parameters
        ----------
        hks : Sequence
            The (h, k) indices of the beams. Elements can be floats,
            strings like '1/2', or Fractions.
        groups : Sequence of int or None, optional
            For each beam, the group of symmetry-equivalent beams that
            it belongs to. Use UNKNOWN_GROUP where not known. If not
            given or None, all groups are unknown.

        Raises
        ------
        SpotPatternError
            If `hks` and `groups` have different length, or if there
            are duplicate beams.
        """
        self.hks = tuple(tuple(_to_fraction(str(v)) if not isinstance(
            v, Fraction) else v for v in hk) for hk in hks)
        if groups is None:
            groups = (UNKNOWN_GROUP,) * len(self.hks)
        self.groups = tuple(UNKNOWN_GROUP if g is UNKNOWN_GROUP else int(g)
                            for g in groups)
        if len(self.groups) != len(self.hks):
            raise SpotPatternError(f'{len(self.groups)} groups for '
                                   f'{len(self.hks)} beams')
        if len(set(self.hks)) != len(self.hks):
            raise SpotPatternError('Duplicate beams in spot pattern')
        self._members = defaultdict(list)
        for beam_id, group in enumerate(self.groups):
            self._members[group].append(beam_id)

    def __len__(self):
        """Return the number of beams in this pattern."""
        return len(self.hks)

    def __repr__(self):
        """Return a representation string for this SpotPattern."""
        return f'SpotPattern({len(self)} beams)'

    @classmethod
    def from_labels(cls, labels, groups_required=False):
        """Return a SpotPattern from beam labels.

        Parameters
        ----------
        labels : Sequence of str
            Labels like '1/2,0', '(1/2|0) [3]', or '-1 1/3 [2]'. h and
            k can be separated by any of ',;_|' or whitespace. The
            integer in square brackets is the group of symmetry-
            equivalent beams.
        groups_required : bool, optional
            Whether all labels must contain a valid group.
            Default is False.

        Returns
        -------
        spot_pattern : SpotPattern

        Raises
        ------
        SpotPatternError
            If a label is invalid, if `groups_required` and any of
            the groups is missing, or if there are duplicate beams.
        """
        hks, groups = [], []
        for label in labels:
            group_match = _GROUP_RE.search(label)
            group = UNKNOWN_GROUP
            if group_match:
                try:
                    group = int(group_match['group'])
                except ValueError:
                    group = UNKNOWN_GROUP
            if groups_required and group is UNKNOWN_GROUP:
                _what = 'Invalid' if group_match else 'Missing'
                raise SpotPatternError(f'{_what} group in {label.strip()!r}')
            hk_str = label[:group_match.start()] if group_match else label
            hk_str = hk_str.replace('(', ' ').replace(')', ' ').strip()
            h_and_k = _HK_SEPARATORS_RE.split(hk_str)
            if len(h_and_k) != 2:
                raise SpotPatternError('Not a pair of h, k indices in '
                                       f'{label.strip()!r}')
            try:
                hk = tuple(_to_fraction(v) for v in h_and_k)
            except (ValueError, ZeroDivisionError):
                raise SpotPatternError('Non-numeric h, k index in '
                                       f'{label.strip()!r}') from None
            if hk in hks:
                raise SpotPatternError('Duplicate beam (inconsistent '
                                       f'name/group?) {label.strip()!r}')
            hks.append(hk)
            groups.append(group)
        return cls(hks, groups)

    @property
    def has_equivalent_beams(self):
        """Return whether any group has at least two beams."""
        return any(len(members) > 1
                   for group, members in self._members.items()
                   if group is not UNKNOWN_GROUP)

    @property
    def has_groups(self):
        """Return whether the groups of all beams are known."""
        return bool(self.hks) and UNKNOWN_GROUP not in self._members

    @property
    def has_superstructure(self):
        """Return whether any beam has non-integer indices."""
        return any(self.is_superstructure(i) for i in range(len(self)))

    def beams_in_group(self, group):
        """Return a tuple of the indices of all beams in `group`."""
        return tuple(self._members.get(group, ()))

    def canonical_name(self, beam_id):
        """Return a label like '(1/2|0) [3]' for beam `beam_id`."""
        h, k = self.hks[beam_id]
        name = f'({_format_index(h)}|{_format_index(k)})'
        group = self.groups[beam_id]
        if group is not UNKNOWN_GROUP:
            name += f' [{group}]'
        return name

    def group(self, beam_id):
        """Return the group of beam `beam_id`."""
        return self.groups[beam_id]

    def index_of(self, hk):
        """Return the index of the beam with (h, k) indices `hk`.

        Parameters
        ----------
        hk : Sequence
            The indices of the beam. Elements can be floats or
            Fractions. Beams are matched within 0.01.

        Returns
        -------
        beam_id : int
            The index of the beam, or -1 if not found.
        """
        h_float, k_float = (float(v) for v in hk)
        for beam_id, (h, k) in enumerate(self.hks):
            if (abs(h_float - float(h)) < _HK_EPS
                    and abs(k_float - float(k)) < _HK_EPS):
                return beam_id
        return -1

    def indices_for_labels(self, labels):
        """Return beam indices for beam labels.

        Parameters
        ----------
        labels : Sequence of str
            Beam labels in any of the forms accepted by from_labels.
            Groups in labels are ignored.

        Returns
        -------
        beam_ids : tuple of int

        Raises
        ------
        SpotPatternError
            If any of the labels is invalid or not in this pattern.
        """
        beam_ids = []
        for label in labels:
            hk = self.from_labels((label,)).hks[0]
            beam_id = self.index_of(hk)
            if beam_id < 0:
                raise SpotPatternError(f'Beam {label.strip()!r} is not '
                                       'in the spot pattern')
            beam_ids.append(beam_id)
        return tuple(beam_ids)

    def is_superstructure(self, beam_id):
        """Return whether beam `beam_id` has non-integer indices."""
        return any(v.denominator != 1 for v in self.hks[beam_id])

    def merged(self, other, groups_required=False):
        """Return a SpotPattern with the beams of this and `other`.

        Parameters
        ----------
        other : SpotPattern
            The pattern to be merged with this one.
        groups_required : bool, optional
            Whether both patterns must have groups for all beams.
            Default is False.

        Returns
        -------
        merged : SpotPattern
            If both patterns have groups, beams are sorted by group,
            beams of this pattern first. Otherwise, the beams of this
            pattern come first, followed by the additional beams of
            `other`, in their original order.

        Raises
        ------
        SpotPatternError
            If `groups_required` but either pattern lacks groups,
            or if a beam is in different groups in the two patterns.
        """
        if groups_required and not self.has_groups:
            raise SpotPatternError('Information on equivalent beams '
                                   'missing in first pattern')
        if groups_required and not other.has_groups:
            raise SpotPatternError('Information on equivalent beams '
                                   'missing in second pattern')
        if not (self.has_groups and other.has_groups):
            hks, groups = list(self.hks), list(self.groups)
            for hk, group in zip(other.hks, other.groups):
                if self.index_of(hk) < 0:
                    hks.append(hk)
                    groups.append(group)
            return SpotPattern(hks, groups)

        hks, groups = [], []
        for group in sorted(set(self.groups) | set(other.groups)):
            others_left = list(other.beams_in_group(group))
            for beam_id in self.beams_in_group(group):
                other_id = other.index_of(self.hks[beam_id])
                if other_id >= 0 and other.groups[other_id] != group:
                    raise SpotPatternError(
                        'Groups of symmetry-equivalent beams disagree: '
                        f'{self.canonical_name(beam_id)} vs. '
                        f'{other.canonical_name(other_id)}'
                        )
                if other_id >= 0:
                    others_left.remove(other_id)
                hks.append(self.hks[beam_id])
                groups.append(group)
            for other_id in others_left:
                hks.append(other.hks[other_id])
                groups.append(group)
        return SpotPattern(hks, groups)
