"""
Host environment - frame scheduling, element lifecycle and the display.

The host plays the role the browser plays for a web page:
- per-frame callbacks (request/cancel, one batch per frame)
- attaching and detaching elements placed in the document
- translating pygame keyboard events into document key events
- compositing every attached element onto the display surface

The async run() loop yields to the event loop after every frame, which is
what pygbag needs to keep the browser responsive.
"""
import asyncio
import time
from typing import Callable, Dict, List, Optional, Tuple

import pygame

from kigames.document import Document, ElementNode
from kigames.elements import CustomElement, ElementRegistry, custom_elements
from kigames.games.input import KeyEvent
from kigames.logging import close_all_sinks, get_logger

log = get_logger('host')

FrameCallback = Callable[[float], None]

# Spacing between stacked elements and around the page edge
LAYOUT_MARGIN = 10


class FrameScheduler:
    """Per-frame callback queue.

    Callbacks requested while a frame is running are deferred to the next
    frame, so a callback that reschedules itself runs exactly once per frame.
    """

    def __init__(self):
        self._pending: Dict[int, FrameCallback] = {}
        self._running: Dict[int, FrameCallback] = {}
        self._next_handle = 1

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: Optional[int]) -> None:
        """Cancel a pending callback. Unknown or spent handles are ignored."""
        if handle is None:
            return
        self._pending.pop(handle, None)
        self._running.pop(handle, None)

    def run_frame(self, timestamp: float) -> int:
        """Run the callbacks queued before this frame started.

        Returns:
            Number of callbacks run
        """
        self._running = self._pending
        self._pending = {}
        count = 0
        while self._running:
            handle = min(self._running)
            callback = self._running.pop(handle)
            callback(timestamp)
            count += 1
        return count

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def is_pending(self, handle: Optional[int]) -> bool:
        return handle in self._pending


class Host:
    """Runs the elements of one document.

    Args:
        document: Page whose nodes get upgraded and which receives key events
        registry: Element definitions used to upgrade nodes
        screen: Display surface; None runs headless (tests, tooling)
    """

    def __init__(
        self,
        document: Optional[Document] = None,
        registry: Optional[ElementRegistry] = None,
        screen: Optional[pygame.Surface] = None,
    ):
        self.document = document if document is not None else Document()
        self.registry = registry if registry is not None else custom_elements
        self.screen = screen
        self.frames = FrameScheduler()
        self.running = True
        self.background_color = (0, 0, 0)

        self._elements: List[CustomElement] = []
        self._positions: Dict[int, Tuple[int, int]] = {}
        self._start_time = time.monotonic()

    # ------------------------------------------------------------------
    # Browser-style primitives
    # ------------------------------------------------------------------
    def request_animation_frame(self, callback: FrameCallback) -> int:
        return self.frames.request_frame(callback)

    def cancel_animation_frame(self, handle: Optional[int]) -> None:
        self.frames.cancel_frame(handle)

    def create_surface(self, size: Tuple[int, int]) -> pygame.Surface:
        """Allocate an offscreen drawing surface for an element."""
        return pygame.Surface(size)

    # ------------------------------------------------------------------
    # Element lifecycle
    # ------------------------------------------------------------------
    @property
    def elements(self) -> List[CustomElement]:
        return list(self._elements)

    def connect(self, element: CustomElement) -> None:
        """Attach an element and run its connected_callback()."""
        if element in self._elements:
            return
        element.host = self
        self._elements.append(element)
        self._positions[id(element)] = self._next_position()
        log.info(f"Connected <{element.tag_name or type(element).__name__}>")
        element.connected_callback()

    def disconnect(self, element: CustomElement) -> None:
        """Detach an element and run its disconnected_callback()."""
        if element not in self._elements:
            return
        self._elements.remove(element)
        self._positions.pop(id(element), None)
        element.disconnected_callback()
        element.host = None
        log.info(f"Disconnected <{element.tag_name or type(element).__name__}>")

    def upgrade(self) -> List[CustomElement]:
        """Create elements for nodes whose tag is now defined.

        Returns:
            Elements created by this call
        """
        created = []
        for node in self.document.nodes:
            if node.is_upgraded or not self.registry.is_defined(node.tag_name):
                continue
            node.element = self.registry.create(node.tag_name)
            self.connect(node.element)
            created.append(node.element)
        return created

    def remove(self, node: ElementNode) -> None:
        """Remove a node from the page, detaching its element."""
        self.document.remove_node(node)
        if node.element is not None:
            self.disconnect(node.element)

    def shutdown(self) -> None:
        """Detach every element (page unload)."""
        for element in list(self._elements):
            self.disconnect(element)

    def _next_position(self) -> Tuple[int, int]:
        """Elements stack vertically in connection order."""
        y = LAYOUT_MARGIN
        for element in self._elements[:-1]:
            _, height = element_outer_size(element)
            y += height + LAYOUT_MARGIN
        return (LAYOUT_MARGIN, y)

    def position_of(self, element: CustomElement) -> Optional[Tuple[int, int]]:
        return self._positions.get(id(element))

    def layout_size(self) -> Tuple[int, int]:
        """Display size needed to show every attached element."""
        width, height = 0, LAYOUT_MARGIN
        for element in self._elements:
            w, h = element_outer_size(element)
            width = max(width, w)
            height += h + LAYOUT_MARGIN
        return (width + 2 * LAYOUT_MARGIN, height)

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------
    def now(self) -> float:
        """Milliseconds since the host started (frame timestamp)."""
        return (time.monotonic() - self._start_time) * 1000.0

    def pump_events(self) -> None:
        """Forward pygame events: quit stops the loop, keys go to the document."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                continue
            key_event = KeyEvent.from_pygame(event)
            if key_event is not None:
                self.document.dispatch_event(key_event)

    def step(self, timestamp: Optional[float] = None) -> int:
        """Run one frame: upgrade newly defined nodes, then frame callbacks."""
        self.upgrade()
        return self.frames.run_frame(self.now() if timestamp is None else timestamp)

    def composite(self) -> None:
        """Draw every attached element onto the display surface."""
        if self.screen is None:
            return
        self.screen.fill(self.background_color)
        for element in self._elements:
            compose = getattr(element, 'compose', None)
            if compose is not None:
                compose(self.screen, self._positions[id(element)])

    async def run(self, fps: int = 60) -> None:
        """Main async loop.

        CRITICAL: Must await asyncio.sleep(0) each frame to yield to browser.

        On exit, normal or not, every element is detached and the record
        sinks are closed so their files are complete on disk.
        """
        log.info(f"Starting frame loop with {len(self._elements)} element(s)")
        clock = pygame.time.Clock()

        try:
            while self.running:
                clock.tick(fps)
                self.pump_events()
                self.step()
                self.composite()
                if self.screen is not None:
                    pygame.display.flip()
                await asyncio.sleep(0)
        finally:
            self.shutdown()
            close_all_sinks()
            log.info("Frame loop stopped")


def element_outer_size(element: CustomElement) -> Tuple[int, int]:
    """Size an element occupies on the page, including its frame."""
    size = getattr(element, 'outer_size', None)
    if size is None:
        return (0, 0)
    return size
