"""Binding environments: a chain of frames, each mapping names to LambdaTerms, searched innermost first."""

from lceval.lang.error import UnboundVariableError


class Environment:
    """A single frame plus the chain of frames enclosing it.

    A child is a snapshot: nothing set on the parent after extending is visible through the child. set only ever
    writes to the innermost frame, and enclosing frames can only be attached by extend and copy, never passed in by a
    caller, so no one holds a writable handle on them. extend therefore only has to copy the innermost frame and can
    share everything above it. Terms are immutable, so frames hold them without cloning.
    """

    def __init__(self, bindings=None):
        self.bindings = dict(bindings) if bindings else {}
        self._parent = None

    @classmethod
    def _chain(cls, bindings, parent):
        env = cls(bindings)
        env._parent = parent
        return env

    def extend(self):
        """Returns a new, empty frame on top of a snapshot of this chain."""
        return Environment._chain(None, Environment._chain(self.bindings, self._parent))

    def copy(self):
        """Copies every frame of this chain."""
        copied = None
        for bindings in reversed(list(self._frames())):
            copied = Environment._chain(bindings, copied)
        return copied

    def _frames(self):
        env = self
        while env is not None:
            yield env.bindings
            env = env._parent

    def set(self, name, value):
        """Binds name to value in the innermost frame only."""
        self.bindings[name] = value

    def get(self, name):
        """Returns the innermost binding of name, or None if name is unbound anywhere in the chain."""
        for bindings in self._frames():
            if name in bindings:
                return bindings[name]
        return None

    def lookup(self, name):
        """Strict variant of get: raises UnboundVariableError instead of returning None."""
        value = self.get(name)
        if value is None:
            raise UnboundVariableError(name)
        return value

    @property
    def depth(self):
        """Number of frames in this chain."""
        return sum(1 for __ in self._frames())

    def names(self):
        """Every name visible from this frame."""
        names = set()
        for bindings in self._frames():
            names.update(bindings)
        return names

    def __contains__(self, name):
        return self.get(name) is not None

    def __repr__(self):
        return f"Environment(bindings={self.bindings!r}, depth={self.depth})"
