"""Pydantic v2 models for the scaffolding entity graph.

A wizard session produces exactly one package (:class:`RulePackage` or
:class:`ParserPackage`) holding one or more items.  All models are frozen:
they are built once from a completed prompt session, handed to the manifest
planner, and never changed afterwards.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ResourceType(str, Enum):
    """Kinds of host resources that can be installed or generated."""
    CONFIGURATION = "configuration"
    CONNECTOR = "connector"
    FORMATTER = "formatter"
    PARSER = "parser"
    RULE = "rule"


class Category(str, Enum):
    """Rule category. ``other`` is a valid value but never offered in menus."""
    ACCESSIBILITY = "accessibility"
    INTEROPERABILITY = "interoperability"
    PERFORMANCE = "performance"
    PWA = "pwa"
    SECURITY = "security"
    OTHER = "other"


class RuleScope(str, Enum):
    """Where a rule can run: any target, only local files, or only sites."""
    ANY = "any"
    LOCAL = "local"
    SITE = "site"


class UseCase(str, Enum):
    """What kind of host events a rule subscribes to."""
    DOM = "dom"
    REQUEST = "request"
    THIRD_PARTY_SERVICE = "thirdPartyService"
    JS_INJECTION = "jsInjection"


def menu_values(enum_cls: type[Enum]) -> list[str]:
    """Return the user-facing values of *enum_cls*, leaving out ``other``."""
    return [member.value for member in enum_cls if member.value != "other"]


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------

class RuleItem(BaseModel):
    """One rule inside a rule package."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name as typed by the operator")
    normalized_name: str = Field(..., description="Delimiter-normalized slug")
    class_name: str = Field(..., description="Generated TypeScript class name")
    category: Category = Field(default=Category.OTHER)
    use_case: Optional[UseCase] = Field(default=None)
    events: tuple[str, ...] = Field(default=(), description="Subscribed event names")
    element_type: Optional[str] = Field(
        default=None, description="Element to watch, only for the dom use case"
    )
    scope: RuleScope = Field(default=RuleScope.ANY)
    description: str = Field(default="", description="Backtick-escaped description")
    parent_name: str = Field(
        default="", description="Normalized package name for multi-rule packages"
    )


class ParserEvent(BaseModel):
    """One event a parser subscribes to."""
    model_config = ConfigDict(frozen=True)

    event: str
    element: Optional[str] = None

    @property
    def key(self) -> tuple[str, Optional[str]]:
        """Uniqueness key within a parser's event list."""
        return (self.event, self.element)


class ParserItem(BaseModel):
    """The single parser inside a parser package."""
    model_config = ConfigDict(frozen=True)

    name: str
    normalized_name: str
    class_name: str
    description: str = ""
    events: tuple[ParserEvent, ...] = ()


# ---------------------------------------------------------------------------
# Packages
# ---------------------------------------------------------------------------

class ScaffoldPackage(BaseModel):
    """Shared metadata of a generated npm package."""
    model_config = ConfigDict(frozen=True)

    name: str
    normalized_name: str
    description: str = ""
    kind: ResourceType
    is_multi: bool = False
    official: bool = False
    package_name: str
    package_main: str = "dist/src/index.js"
    version: str = Field(..., description="Host version at generation time")
    destination: Path


class RulePackage(ScaffoldPackage):
    """A package holding one rule, or several when ``is_multi`` is set."""
    kind: ResourceType = ResourceType.RULE
    items: tuple[RuleItem, ...] = ()


class ParserPackage(ScaffoldPackage):
    """A package holding exactly one parser."""
    kind: ResourceType = ResourceType.PARSER
    items: tuple[ParserItem, ...] = ()
