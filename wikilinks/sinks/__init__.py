"""Record sinks — render pages and links for a target system."""

from wikilinks.sinks.base import MAX_TEXT_LENGTH, RecordSink
from wikilinks.sinks.jsonl import JsonLinesSink
from wikilinks.sinks.sql import SqlDumpSink
from wikilinks.sinks.sqlite import SqliteSink

__all__ = ["MAX_TEXT_LENGTH", "RecordSink", "JsonLinesSink", "SqlDumpSink", "SqliteSink"]
