"""
Builders for the processor family.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Any, Dict, List, Optional, Union

from logforge.builder import Builder, BuilderOptions, ServiceLookup
from logforge.defaults import DEFAULT_LEVEL, DEFAULT_UID_LENGTH
from logforge.lookup import resolve_service
from logforge.processors.request import PsrLogMessageProcessor, WebProcessor
from logforge.processors.runtime import GitProcessor, MemoryUsageProcessor, UidProcessor


class GitProcessorOptions(BuilderOptions):
    level: Union[int, str] = DEFAULT_LEVEL


class MemoryUsageProcessorOptions(BuilderOptions):
    real_usage: bool = True
    use_formatting: bool = True


class PsrLogMessageProcessorOptions(BuilderOptions):
    date_format: Optional[str] = None
    remove_used_context_fields: bool = False


class UidProcessorOptions(BuilderOptions):
    length: Any = DEFAULT_UID_LENGTH


class WebProcessorOptions(BuilderOptions):
    server_data: Any = None
    extra_fields: Optional[Union[Dict[str, str], List[str]]] = None


class GitProcessorBuilder(Builder[GitProcessor, GitProcessorOptions]):
    options_model = GitProcessorOptions

    def assemble(self, lookup: ServiceLookup, options: GitProcessorOptions) -> GitProcessor:
        return GitProcessor(options.level)


class MemoryUsageProcessorBuilder(Builder[MemoryUsageProcessor, MemoryUsageProcessorOptions]):
    options_model = MemoryUsageProcessorOptions

    def assemble(
        self, lookup: ServiceLookup, options: MemoryUsageProcessorOptions
    ) -> MemoryUsageProcessor:
        return MemoryUsageProcessor(options.real_usage, options.use_formatting)


class PsrLogMessageProcessorBuilder(
    Builder[PsrLogMessageProcessor, PsrLogMessageProcessorOptions]
):
    options_model = PsrLogMessageProcessorOptions

    def assemble(
        self, lookup: ServiceLookup, options: PsrLogMessageProcessorOptions
    ) -> PsrLogMessageProcessor:
        return PsrLogMessageProcessor(options.date_format, options.remove_used_context_fields)


class UidProcessorBuilder(Builder[UidProcessor, UidProcessorOptions]):
    """
    Builds a UidProcessor.

    Lengths outside 1..32 are rejected by UidProcessor itself with a
    ValueError, which propagates unchanged.
    """

    options_model = UidProcessorOptions

    def assemble(self, lookup: ServiceLookup, options: UidProcessorOptions) -> UidProcessor:
        return UidProcessor(options.length)


class WebProcessorBuilder(Builder[WebProcessor, WebProcessorOptions]):
    """
    Builds a WebProcessor.

    ``serverData`` may hold the server variables inline or name a service
    in the lookup that provides them.

    Raises:
        ServiceNotFoundError: "No serverData service found"
        ServiceNotCreatedError: "Could not load ServerData"
    """

    options_model = WebProcessorOptions

    def assemble(self, lookup: ServiceLookup, options: WebProcessorOptions) -> WebProcessor:
        server_data = resolve_service(lookup, options.server_data, "serverData", "ServerData")
        return WebProcessor(server_data, options.extra_fields)
