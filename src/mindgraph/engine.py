"""The mind-map engine: public operations over one tree and one surface."""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING, Any, Callable

from mindgraph import visibility
from mindgraph.config import Strategies, resolve_config
from mindgraph.events.dispatcher import EventDispatcher
from mindgraph.events.types import ClickKind, NodeClickEvent, RenderEvent, ViewportEvent
from mindgraph.layout.engine import compute_layout
from mindgraph.layout.normalize import assign_branches
from mindgraph.model import Point, ViewportState
from mindgraph.render.reconcile import RenderPass, reconcile
from mindgraph.render.renderers import RenderContext
from mindgraph.viewport import ViewportController

if TYPE_CHECKING:
    from mindgraph.config import MindmapConfig
    from mindgraph.events.processor import EventProcessor
    from mindgraph.events.types import Event
    from mindgraph.model import Link, Node
    from mindgraph.render.scene import Surface

logger = logging.getLogger(__name__)


class Mindmap:
    """Interactive, collapsible mind map of a tree.

    Creating the engine initializes it: configuration is resolved, the
    container size is read once from the surface, the tree is installed
    with :meth:`set_data` and the first pass is rendered.

    Args:
        surface: Drawing surface (e.g. :class:`~mindgraph.render.scene.SceneGraph`)
        root: Root node of the tree
        config: Base configuration (defaults when omitted)
        preset: Named preset applied on top of ``config``
        processors: Event processors notified of clicks, renders and zooms
        **options: Option overrides applied last

    Example:
        >>> scene = SceneGraph(800, 600)
        >>> mm = Mindmap(scene, build_tree(extract_headings(text)), preset="colorful")
        >>> mm.toggle(mm.root.children[0])
        >>> scene.flush()
    """

    def __init__(
        self,
        surface: Surface,
        root: Node,
        config: MindmapConfig | None = None,
        *,
        preset: str | None = None,
        processors: list[EventProcessor] | None = None,
        **options: Any,
    ) -> None:
        self.surface = surface
        self.config = resolve_config(preset, options, base=config)
        self.strategies = Strategies()
        self.strategies.refresh(self.config)
        self.events = EventDispatcher(processors)

        self.state = ViewportState(
            width=surface.width,
            height=surface.height,
            auto_fit=self.config.auto_fit is not False,
        )
        self.viewport = ViewportController(self.state, surface, self.config.horizontal_slack)

        self._ids = itertools.count(1)
        self._nodes: dict[int, Node] = {}
        self._links: dict[int, Link] = {}
        self.root: Node = root

        self.set_viewport(self.state.zoom_translate, self.state.zoom_scale)
        self.set_data(root)
        self.update()

        if self.config.auto_fit is None:
            self.state.auto_fit = False

    # -- configuration --------------------------------------------------------

    def configure(self, **options: Any) -> MindmapConfig:
        """Merge ``options`` into the configuration.

        Only strategies whose name changed are re-created. Does not
        re-render; call :meth:`update` afterwards.
        """
        self.config = resolve_config(overrides=options, base=self.config)
        self.strategies.refresh(self.config)
        self.viewport.horizontal_slack = self.config.horizontal_slack
        if "auto_fit" in options:
            self.state.auto_fit = bool(options["auto_fit"])
        return self.config

    # -- data -----------------------------------------------------------------

    def set_data(self, root: Node) -> Mindmap:
        """Install a new tree.

        Branch ids and depths are reassigned, the root is anchored at the
        vertical centre of the container and, if ``collapse_depth`` is set,
        deep nodes start collapsed.
        """
        assign_branches(root)
        root.previous_position = Point(0.0, self.state.height / 2)
        root.position = None
        if self.config.collapse_depth:
            visibility.collapse_to_depth(root, self.config.collapse_depth)
        self.root = root
        return self

    # -- update cycle ---------------------------------------------------------

    def update(self, source: Node | None = None) -> RenderPass:
        """Re-layout the visible tree and reconcile the rendered elements.

        Args:
            source: Node that triggered the update (defaults to the root);
                it keeps its perpendicular anchor and is where entering
                elements start and exiting elements go.

        Returns:
            The diff that was applied
        """
        source = source or self.root
        result = compute_layout(self.root, source, self.strategies.layout, self.config)

        if self.state.auto_fit:
            self.viewport.auto_fit(result.nodes)
            self._emit_viewport(auto_fit=True)
        else:
            self.viewport.track(result.nodes)

        for node in result.nodes:
            if node.id is None:
                node.id = next(self._ids)
        nodes = {node.id: node for node in result.nodes}
        links = {link.target.id: link for link in result.links}
        node_diff = reconcile(self._nodes, nodes)
        link_diff = reconcile(self._links, links)
        render_pass = RenderPass(source=source, nodes=node_diff, links=link_diff)

        self.strategies.renderer.render(self._context(), source, node_diff, link_diff)

        for node in result.nodes:
            node.previous_position = node.position
        self._nodes = nodes
        self._links = links

        logger.debug(
            "Render pass from %r: %d entered, %d updated, %d exited",
            source,
            len(node_diff.entered),
            len(node_diff.updated),
            len(node_diff.exited),
        )
        self.events.emit(
            RenderEvent(
                source_id=source.id,
                entered=len(node_diff.entered),
                updated=len(node_diff.updated),
                exited=len(node_diff.exited),
            )
        )
        return render_pass

    def _context(self) -> RenderContext:
        return RenderContext(
            surface=self.surface,
            config=self.config,
            color=self.strategies.color,
            link_shape=self.strategies.link_shape,
            click_handler=self._click_handler,
        )

    def _click_handler(self, node: Node) -> Callable[[], None]:
        node_id = node.id

        def handler() -> None:
            self.dispatch(NodeClickEvent(node_id=node_id, kind=ClickKind.TOGGLE))

        return handler

    # -- interaction ----------------------------------------------------------

    def toggle(self, node: Node) -> RenderPass | None:
        """Collapse or expand ``node`` and re-render from it.

        Returns:
            The render pass, or None for a leaf (nothing changes)
        """
        if not visibility.toggle(node):
            logger.debug("Ignoring toggle on leaf %r", node)
            return None
        return self.update(node)

    def expand_all(self) -> RenderPass:
        """Expand every collapsed node and re-render from the root."""
        visibility.expand_all(self.root)
        return self.update(self.root)

    def set_viewport(self, translate: Point | tuple[float, float], scale: float) -> Point:
        """Pan/zoom gesture entry point; ``scale`` is bounded to ``scale_range``."""
        low, high = self.config.scale_range
        scale = min(high, max(low, scale))
        clamped = self.viewport.set_zoom(translate, scale)
        self._emit_viewport(auto_fit=False)
        return clamped

    def dispatch(self, event: Event) -> RenderPass | None:
        """Handle an event coming from the surface."""
        self.events.emit(event)
        if isinstance(event, NodeClickEvent) and event.kind is ClickKind.TOGGLE:
            node = self._nodes.get(event.node_id)
            if node is None:
                logger.debug("Click on node %s which is no longer rendered", event.node_id)
                return None
            return self.toggle(node)
        return None

    def _emit_viewport(self, auto_fit: bool) -> None:
        self.events.emit(
            ViewportEvent(
                translate=self.state.zoom_translate.as_tuple(),
                scale=self.state.zoom_scale,
                auto_fit=auto_fit,
            )
        )

    # -- queries --------------------------------------------------------------

    @property
    def nodes(self) -> list[Node]:
        """Currently rendered nodes in layout order."""
        return list(self._nodes.values())

    @property
    def links(self) -> list[Link]:
        return list(self._links.values())

    def node(self, node_id: int) -> Node | None:
        return self._nodes.get(node_id)

    def close(self) -> None:
        """Shut down event processors."""
        self.events.shutdown()
