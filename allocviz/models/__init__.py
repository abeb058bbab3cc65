"""Domain models for the allocation visualizer.

Tokenizer output (ParsedTable), inferred schema (RoleMap), normalized records,
filter selections and the session triple that ties them together.
"""

from .aggregate_result import AggregateResult
from .config_models import AppConfig, InferenceConfig
from .error_record import ErrorRecord
from .filter_spec import ALL, FilterSpec, GroupDimension
from .ingest_result import IngestResult
from .parsed_table import ParsedTable
from .record import NormalizedRecord
from .role_map import DEFAULT_PRODUCT_LABEL, RoleMap
from .session_state import SessionState

__all__ = [
    # Tokenizer / inference
    "ParsedTable",
    "RoleMap",
    "DEFAULT_PRODUCT_LABEL",
    # Records and selections
    "NormalizedRecord",
    "FilterSpec",
    "GroupDimension",
    "ALL",
    # Results
    "IngestResult",
    "AggregateResult",
    "SessionState",
    "ErrorRecord",
    # Configuration
    "InferenceConfig",
    "AppConfig",
]
