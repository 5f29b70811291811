"""
Composable selection predicates over stored records.

A predicate is a small expression tree that can be turned into a Django
``Q`` object for the database, or evaluated against a single object in
memory. Both interpreters must agree; the tests check them side by side.

    >>> p = Eq("visibility", "public") | (Eq("author_key", "alice") & In("visibility", ("drafts",)))
    >>> Post.objects.filter(p.as_q())
"""
from django.db.models import Q


class Predicate:
    """
    Base class for predicate nodes.

    Nodes are immutable values: two nodes are equal when they have the same
    type and the same arguments.
    """

    def __and__(self, other):
        return And((self, other))

    def __or__(self, other):
        return Or((self, other))

    def __eq__(self, other):
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return hash((type(self), self._key()))

    def __repr__(self):
        return f"{type(self).__name__}{self._key()!r}"

    def _key(self):
        raise NotImplementedError

    def as_q(self):
        raise NotImplementedError

    def matches(self, obj):
        raise NotImplementedError


class Eq(Predicate):
    """Field equals value."""

    def __init__(self, field, value):
        self.field = field
        self.value = value

    def _key(self):
        return (self.field, self.value)

    def as_q(self):
        return Q(**{self.field: self.value})

    def matches(self, obj):
        return getattr(obj, self.field) == self.value


class In(Predicate):
    """Field is one of values."""

    def __init__(self, field, values):
        self.field = field
        self.values = tuple(values)

    def _key(self):
        return (self.field, self.values)

    def as_q(self):
        return Q(**{f"{self.field}__in": list(self.values)})

    def matches(self, obj):
        return getattr(obj, self.field) in self.values


class And(Predicate):
    """All operands hold. An empty conjunction matches everything."""

    def __init__(self, operands):
        self.operands = tuple(operands)

    def _key(self):
        return self.operands

    def as_q(self):
        q = Q()
        for operand in self.operands:
            q &= operand.as_q()
        return q

    def matches(self, obj):
        return all(operand.matches(obj) for operand in self.operands)


class Or(Predicate):
    """At least one operand holds."""

    def __init__(self, operands):
        # Q() | x is x, so an empty disjunction would silently match everything.
        if not operands:
            raise ValueError("Or needs at least one operand")
        self.operands = tuple(operands)

    def _key(self):
        return self.operands

    def as_q(self):
        first, *rest = self.operands
        q = first.as_q()
        for operand in rest:
            q |= operand.as_q()
        return q

    def matches(self, obj):
        return any(operand.matches(obj) for operand in self.operands)
