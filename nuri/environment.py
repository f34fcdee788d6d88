from typing import Dict, Iterator, Optional

from .values import Value


class Environment:
    """One lexical scope: a name -> value mapping plus a link to the enclosing scope.

    Lookups walk outwards through parents; bindings are always written to
    this scope and never to an ancestor.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Value] = {}

    def get(self, name: str) -> Optional[Value]:
        # Not found is None, the caller decides whether that is an error
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        return None

    def set(self, name: str, value: Value) -> Value:
        self.values[name] = value
        return value

    def child(self) -> 'Environment':
        return Environment(parent=self)

    def depth(self) -> int:
        n = 0
        env = self.parent
        while env is not None:
            n += 1
            env = env.parent
        return n

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __repr__(self) -> str:
        return f"<Environment depth={self.depth()} names={sorted(self.values)}>"
