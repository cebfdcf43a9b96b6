## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable
from dataclasses import dataclass, field

from .types import Verb
from .errors import VerbNameError
from .loader import get_verb_meta


@dataclass
class Library:
    verbs: dict[str, Verb] = field(default_factory=dict)
    aliases: dict[str, str] = field(default_factory=dict)

    # Registration helpers
    def add_verb(self, name: str, fn: Callable[..., Any]) -> Verb:
        verb = Verb(name=name, fn=fn, meta=get_verb_meta(fn, name))
        self.verbs[name] = verb
        return verb

    def add_alias(self, alias: str, name: str) -> None:
        if name not in self.verbs:
            raise VerbNameError(f"Cannot alias `{alias}` to unknown verb `{name}`.", verb_name=name)
        self.aliases[alias] = name

    def ensure_consistent(self) -> None:
        for alias, name in self.aliases.items():
            assert name in self.verbs, f"Alias `{alias}` refers to missing verb `{name}`."

    def get_verb(self, name: str) -> Verb:
        resolved_name = self.aliases.get(name, name)
        if (verb := self.verbs.get(resolved_name)) is not None:
            return verb
        raise VerbNameError(f"Verb `{name}` not found in library.", verb_name=name)

    def has_verb(self, name: str) -> bool:
        return self.aliases.get(name, name) in self.verbs

    def list_verbs(self) -> dict[str, dict]:
        return {n: v.meta for n, v in sorted(self.verbs.items())}
