"""Processing context that turns collected objects into a chart."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from helmify.config import Config
from helmify.decoder import StopSignal
from helmify.metadata import Service
from helmify.model import Processor, Resource, Template

logger = logging.getLogger(__name__)


class _Output(Protocol):
    def create(
        self,
        chart_dir: str,
        chart_name: str,
        crd: bool,
        cert_manager_as_subchart: bool,
        cert_manager_version: str,
        cert_manager_install_crd: bool,
        templates: Sequence[Template],
        filenames: Sequence[str],
    ) -> None: ...


class AppContext:
    """Collects Kubernetes objects and converts them into chart templates."""

    def __init__(self, config: Config, output: _Output) -> None:
        self.config = config
        self.output = output
        self.app_meta = Service(config)
        self._processors: list[Processor] = []
        self._default_processor: Processor | None = None
        self._objects: list[Resource] = []
        self._filenames: list[str] = []

    def with_processors(self, *processors: Processor) -> AppContext:
        """Register processors, tried in the order given."""
        self._processors.extend(processors)
        return self

    def with_default_processor(self, processor: Processor | None) -> AppContext:
        """Set the processor used for objects no other processor accepts."""
        self._default_processor = processor
        return self

    def add(self, obj: Resource, filename: str = "") -> None:
        """Add an object; ``filename`` names its source file, or is empty."""
        # Every object must be loaded before processing starts to settle the app metadata.
        self.app_meta.load(obj)
        self._objects.append(obj)
        self._filenames.append(filename)

    def create_helm(self, stop: StopSignal | None = None) -> None:
        """Process all objects and write the chart, unless ``stop`` gets set."""
        logger.info(
            "creating a chart ChartName=%s Namespace=%s",
            self.app_meta.chart_name(),
            self.app_meta.namespace(),
        )
        templates: list[Template] = []
        filenames: list[str] = []
        for obj, source in zip(self._objects, self._filenames):
            template = self._process(obj)
            if template is not None:
                templates.append(template)
                filenames.append(source or template.filename())
            if stop is not None and stop.is_set():
                return
        self.output.create(
            self.config.chart_dir,
            self.config.chart_name,
            self.config.crd,
            self.config.cert_manager_as_subchart,
            self.config.cert_manager_version,
            self.config.cert_manager_install_crd,
            templates,
            filenames,
        )

    def _process(self, obj: Resource) -> Template | None:
        for processor in self._processors:
            processed, template = processor.process(self.app_meta, obj)
            if processed:
                logger.debug(
                    "processed ApiVersion=%s Kind=%s Name=%s", obj.api_version, obj.kind, obj.name
                )
                return template
        if self._default_processor is None:
            logger.warning(
                "Skipping: no suitable processor for resource. ApiVersion=%s Kind=%s Name=%s",
                obj.api_version,
                obj.kind,
                obj.name,
            )
            return None
        _, template = self._default_processor.process(self.app_meta, obj)
        return template