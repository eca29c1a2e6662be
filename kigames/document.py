"""
Document model - the page an element lives in.

A Document holds:
- element nodes parsed from the page markup (tags that may later be
  upgraded into live elements by the host)
- script-loading requests (the page <head>)
- the process-wide keyboard event source; elements subscribe to it for
  their attached lifetime regardless of where they sit in the page
"""
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Any, Callable, Dict, List, Optional

from kigames.elements import CustomElement
from kigames.logging import get_logger

log = get_logger('document')

Listener = Callable[[Any], None]


class EventTarget:
    """Listener registry keyed by event type.

    Adding the same listener twice registers it once; removing an unknown
    listener does nothing.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = {}

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.setdefault(event_type, [])
        if listener not in listeners:
            listeners.append(listener)

    def remove_event_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def dispatch_event(self, event: Any) -> None:
        """Deliver an event to every listener registered for ``event.type``."""
        # Copy: listeners may unsubscribe while handling
        for listener in list(self._listeners.get(event.type, [])):
            listener(event)

    def listener_count(self, event_type: str) -> int:
        return len(self._listeners.get(event_type, []))


@dataclass
class ElementNode:
    """A tag placed in the page markup."""
    tag_name: str
    attributes: Dict[str, Optional[str]] = field(default_factory=dict)
    element: Optional[CustomElement] = None

    @property
    def is_upgraded(self) -> bool:
        return self.element is not None


@dataclass
class ScriptRequest:
    """A request to load a script resource."""
    src: str
    type: str = 'text/python'
    is_async: bool = True
    loaded: bool = False


class _MarkupParser(HTMLParser):
    """Collects element tags and <script src> entries from page markup."""

    def __init__(self):
        super().__init__()
        self.nodes: List[ElementNode] = []
        self.scripts: List[ScriptRequest] = []

    def handle_starttag(self, tag, attrs):
        attributes = dict(attrs)
        if tag == 'script':
            if attributes.get('src'):
                self.scripts.append(ScriptRequest(
                    src=attributes['src'],
                    type=attributes.get('type') or 'text/javascript',
                    is_async='async' in attributes,
                ))
            return
        self.nodes.append(ElementNode(tag_name=tag, attributes=attributes))


class Document(EventTarget):
    """An in-memory page.

    Args:
        nodes: Element nodes in document order
        scripts: Script requests already present in the page
        fetch: Called with every newly appended ScriptRequest; this is how
            script resources actually get loaded
    """

    def __init__(
        self,
        nodes: Optional[List[ElementNode]] = None,
        scripts: Optional[List[ScriptRequest]] = None,
        fetch: Optional[Callable[[ScriptRequest], None]] = None,
    ):
        super().__init__()
        self._nodes: List[ElementNode] = list(nodes or [])
        self._scripts: List[ScriptRequest] = list(scripts or [])
        self._fetch = fetch

    @classmethod
    def from_markup(
        cls,
        markup: str,
        fetch: Optional[Callable[[ScriptRequest], None]] = None,
    ) -> 'Document':
        """Parse page markup (tag names are lowercased by the parser)."""
        parser = _MarkupParser()
        parser.feed(markup)
        parser.close()
        log.debug(f"Parsed {len(parser.nodes)} nodes, {len(parser.scripts)} scripts")
        return cls(nodes=parser.nodes, scripts=parser.scripts, fetch=fetch)

    @property
    def nodes(self) -> List[ElementNode]:
        return list(self._nodes)

    @property
    def scripts(self) -> List[ScriptRequest]:
        return list(self._scripts)

    def get_elements_by_tag_name(self, tag_name: str) -> List[ElementNode]:
        if tag_name == '*':
            return self.nodes
        tag_name = tag_name.lower()
        return [node for node in self._nodes if node.tag_name == tag_name]

    def append_node(self, tag_name: str, **attributes: str) -> ElementNode:
        node = ElementNode(tag_name=tag_name.lower(), attributes=dict(attributes))
        self._nodes.append(node)
        return node

    def remove_node(self, node: ElementNode) -> None:
        """Drop a node from the page. The host disconnects its element."""
        if node in self._nodes:
            self._nodes.remove(node)

    def query_script(self, fragment: str) -> Optional[ScriptRequest]:
        """First script request whose src contains ``fragment``."""
        for script in self._scripts:
            if fragment in script.src:
                return script
        return None

    def append_script(self, request: ScriptRequest) -> None:
        """Add a script request and hand it to the fetch hook."""
        self._scripts.append(request)
        if self._fetch is not None:
            self._fetch(request)
