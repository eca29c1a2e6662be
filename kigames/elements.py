"""
Element registry - self-registering UI elements.

Games register a factory once under a stable tag name (custom-element style).
Pages place the tag in their markup; the host upgrades every node whose tag
has a registered factory into a live element.

Usage:
    from kigames.elements import CustomElement, define

    class MyWidget(CustomElement):
        def connected_callback(self):
            ...

    define('ki-games-widget', MyWidget)
"""
import re
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from kigames.logging import get_logger

if TYPE_CHECKING:
    from kigames.host import Host

log = get_logger('elements')

# Lowercase, starts with a letter, contains at least one hyphen.
_VALID_TAG_NAME = re.compile(r'^[a-z][a-z0-9_.]*-[a-z0-9_.\-]*$')


class ElementDefinitionError(ValueError):
    """Raised for an invalid tag name or a repeated definition."""


class CustomElement:
    """Base class for elements that can be placed in a page.

    The host sets ``host`` before calling connected_callback() and clears it
    after disconnected_callback().
    """

    tag_name: Optional[str] = None

    def __init__(self):
        self.host: Optional['Host'] = None

    @property
    def is_connected(self) -> bool:
        return self.host is not None

    def connected_callback(self) -> None:
        """Called when the element is attached to a host."""

    def disconnected_callback(self) -> None:
        """Called when the element is removed from its host."""


ElementFactory = Callable[[], CustomElement]


class ElementRegistry:
    """Maps tag names to element factories.

    Each name can be defined exactly once for the lifetime of the registry.
    """

    def __init__(self):
        self._definitions: Dict[str, ElementFactory] = {}

    def define(self, name: str, factory: ElementFactory) -> None:
        """Register a factory under a tag name.

        Raises:
            ElementDefinitionError: If the name is invalid or already defined
        """
        if not _VALID_TAG_NAME.match(name):
            raise ElementDefinitionError(
                f"'{name}' is not a valid element name "
                "(lowercase, starting with a letter, containing a hyphen)"
            )
        if name in self._definitions:
            raise ElementDefinitionError(f"'{name}' has already been defined")

        self._definitions[name] = factory
        if isinstance(factory, type) and issubclass(factory, CustomElement):
            factory.tag_name = name
        log.info(f"Defined <{name}>")

    def get(self, name: str) -> Optional[ElementFactory]:
        return self._definitions.get(name.lower())

    def is_defined(self, name: str) -> bool:
        return name.lower() in self._definitions

    def create(self, name: str) -> CustomElement:
        """Instantiate the element registered under a tag name.

        Raises:
            KeyError: If the name has not been defined
        """
        factory = self._definitions[name.lower()]
        return factory()

    def names(self) -> List[str]:
        return sorted(self._definitions)


# Process-wide registry used by game definition files
custom_elements = ElementRegistry()


def define(name: str, factory: ElementFactory) -> None:
    """Register a factory in the process-wide registry."""
    custom_elements.define(name, factory)
