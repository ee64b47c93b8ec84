"""
Inheritance chain walker.

Follows "class X extends Y" through import statements, one file per level,
until it reaches a generic base class, a file with no resolvable parent,
an already visited file, or the depth cap.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from widgetscope.engine.imports import ParentResolver
from widgetscope.engine.models import InheritanceChain, ResolutionContext, TerminationReason
from widgetscope.engine.reader import SourceReadError, SourceReader, normalize_path
from widgetscope.engine.settings import EngineSettings

logger = logging.getLogger(__name__)


class InheritanceChainWalker:
    """Builds the InheritanceChain for a compiled widget file."""

    def __init__(self, settings: EngineSettings, reader: Optional[SourceReader] = None):
        self.settings = settings
        self.reader = reader or SourceReader()

    def walk(self, file_path: Path, context: Optional[ResolutionContext] = None) -> InheritanceChain:
        """
        Walk the ancestors of file_path.

        Args:
            file_path: Compiled file to start from
            context: Per-call traversal state; a fresh one is created if omitted

        Returns:
            Chain of parent class names, immediate parent first, never longer
            than max_inheritance_depth
        """
        context = context or ResolutionContext(self.reader)
        resolver = ParentResolver(self.settings, context.exists)
        chain = InheritanceChain()
        self._walk(normalize_path(file_path), chain, context, resolver, depth=0)
        logger.debug(
            "Chain for %s: %s (%s)",
            file_path, " -> ".join(chain.classes) or "<none>",
            chain.termination_reason.value if chain.termination_reason else "-",
        )
        return chain

    def _walk(
        self,
        path: Path,
        chain: InheritanceChain,
        context: ResolutionContext,
        resolver: ParentResolver,
        depth: int,
    ) -> None:
        if depth >= self.settings.max_inheritance_depth:
            chain.termination_reason = TerminationReason.DEPTH_LIMIT
            return

        context.visited_chain.add(path)
        try:
            text = context.read(path)
        except SourceReadError:
            chain.termination_reason = TerminationReason.MISSING_FILE
            return

        link = resolver.resolve_parent(path, text)
        if link.is_generic:
            # Recorded for visibility, never expanded
            chain.classes.append(link.parent_name)
            chain.termination_reason = TerminationReason.GENERIC_BASE
            return

        if link.parent_path is None:
            chain.termination_reason = link.reason
            return

        if link.parent_path in context.visited_chain:
            logger.debug("Cycle at %s -> %s", path, link.parent_path)
            chain.termination_reason = TerminationReason.CYCLE
            return

        chain.classes.append(link.parent_name)
        self._walk(link.parent_path, chain, context, resolver, depth + 1)
