"""
Data models for converted documents: the generic JSON value variant,
the extracted Alteryx workflow, and per-conversion result metadata.
"""

from dataclasses import dataclass, field
from typing import Optional, Union


# ── Generic JSON value ───────────────────────────────────────────────

ATTRIBUTES_KEY = "@attributes"
TEXT_KEY = "#text"


@dataclass
class JsonScalar:
    """A text leaf."""
    value: str

    def to_python(self):
        return self.value


@dataclass
class JsonMapping:
    """An ordered key → value mapping."""
    items: dict = field(default_factory=dict)

    def to_python(self):
        return {key: value.to_python() for key, value in self.items.items()}


@dataclass
class JsonSequence:
    """Values collected from sibling elements sharing a tag name."""
    items: list = field(default_factory=list)

    def to_python(self):
        return [value.to_python() for value in self.items]


JsonValue = Union[JsonScalar, JsonMapping, JsonSequence]


# ── Alteryx workflow ─────────────────────────────────────────────────

@dataclass
class AlteryxConnection:
    """A connection between two tools."""
    origin: str
    destination: str
    origin_output: Optional[str] = None      # e.g., "Output", "True", "Left"
    destination_input: Optional[str] = None  # e.g., "Input", "Right"

    def to_dict(self) -> dict:
        data = {"origin": self.origin, "destination": self.destination}
        if self.origin_output is not None:
            data["originOutput"] = self.origin_output
        if self.destination_input is not None:
            data["destinationInput"] = self.destination_input
        return data

    def __repr__(self):
        return (f"AlteryxConnection({self.origin}:{self.origin_output or ''} "
                f"→ {self.destination}:{self.destination_input or ''})")


@dataclass
class AlteryxTool:
    """A single Alteryx tool node."""
    id: str
    name: str                  # Full plugin string, "Unknown" if missing
    type: str                  # Derived short name, e.g., "Filter", "Join"
    plugin: str                # e.g., "AlteryxBasePluginsGui.Filter.Filter"
    position: Optional[dict] = None  # x, y coordinates
    configuration: dict = field(default_factory=dict)
    engine_settings: Optional[dict] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "plugin": self.plugin,
        }
        if self.position is not None:
            data["position"] = dict(self.position)
        data["configuration"] = dict(self.configuration)
        if self.engine_settings is not None:
            data["engineSettings"] = dict(self.engine_settings)
        return data

    def __repr__(self):
        return f"AlteryxTool({self.id}, {self.type})"


@dataclass
class AlteryxMetadata:
    """Workflow-level descriptive fields from <MetaInfo>."""
    version: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None
    created: Optional[str] = None
    modified: Optional[str] = None
    category: Optional[str] = None

    def to_dict(self) -> dict:
        fields = ("version", "author", "description", "created", "modified", "category")
        return {
            name: getattr(self, name)
            for name in fields
            if getattr(self, name) is not None
        }


@dataclass
class AlteryxWorkflow:
    """Complete extracted Alteryx workflow."""
    metadata: AlteryxMetadata = field(default_factory=AlteryxMetadata)
    tools: list = field(default_factory=list)        # List[AlteryxTool]
    connections: list = field(default_factory=list)  # List[AlteryxConnection]
    properties: dict = field(default_factory=dict)
    constants: Optional[dict] = None

    def get_tool(self, tool_id: str) -> Optional[AlteryxTool]:
        for tool in self.tools:
            if tool.id == tool_id:
                return tool
        return None

    def get_incoming_connections(self, tool_id: str) -> list:
        """Get all connections where this tool is the destination."""
        return [c for c in self.connections if c.destination == tool_id]

    def get_outgoing_connections(self, tool_id: str) -> list:
        """Get all connections where this tool is the origin."""
        return [c for c in self.connections if c.origin == tool_id]

    def to_dict(self) -> dict:
        data = {
            "metadata": self.metadata.to_dict(),
            "tools": [t.to_dict() for t in self.tools],
            "connections": [c.to_dict() for c in self.connections],
            "properties": dict(self.properties),
        }
        if self.constants is not None:
            data["constants"] = dict(self.constants)
        return data


# ── Conversion result ────────────────────────────────────────────────

@dataclass
class ConversionResult:
    """Outcome of one conversion, with the metadata callers persist.

    Attributes:
        output: Formatted JSON text, empty on failure.
        file_type: "alteryx-workflow" or "generic", empty when detection
            never ran.
        duration_ms: Wall time spent converting; 0 on failure.
        input_size: Length of the input text in characters.
        output_size: Length of the output text in characters.
        status: "success" or "error".
        error: Error message when status is "error".
        cached: Whether the output came from the conversion cache.
    """
    output: str = ""
    file_type: str = ""
    duration_ms: float = 0.0
    input_size: int = 0
    output_size: int = 0
    status: str = "success"
    error: Optional[str] = None
    cached: bool = False

    @property
    def ok(self) -> bool:
        return self.status == "success"
