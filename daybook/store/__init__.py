"""
store package
-------------
Record persistence behind the journal pipelines.

- RecordSource / RecordSink: what the export and import pipelines need
- YamlStore: single-file YAML implementation of both
"""
from daybook.store.protocols import RecordSink, RecordSource
from daybook.store.yaml_store import YamlStore

__all__ = ["RecordSource", "RecordSink", "YamlStore"]
