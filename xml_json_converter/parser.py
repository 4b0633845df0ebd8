"""
Alteryx .yxmd Workflow Parser
=============================
Extracts tools, connections, metadata, workflow properties and constants
from Alteryx workflow XML into an AlteryxWorkflow model.

Missing optional structure never raises; it falls back to empty or default
values. Tool ids and connection endpoints are copied through as-is, without
checking that connections point at existing tools.
"""

import xml.etree.ElementTree as ET
import logging
from typing import Optional

from .models import AlteryxWorkflow, AlteryxMetadata, AlteryxTool, AlteryxConnection
from .xmltree import parse_xml

logger = logging.getLogger(__name__)

# ── Plugin name → short tool type mapping ────────────────────────────
PLUGIN_TYPE_MAP = {
    "Filter": "Filter",
    "Formula": "Formula",
    "AlteryxSelect": "Select",
    "Join": "Join",
    "Union": "Union",
    "Summarize": "Summarize",
    "CrossTab": "CrossTab",
    "Sort": "Sort",
    "Sample": "Sample",
    "Unique": "Unique",
    "TextInput": "TextInput",
    "DbFileInput": "InputData",
    "DbFileOutput": "OutputData",
    "BrowseV2": "Browse",
    "TextToColumns": "TextToColumns",
    "RegEx": "RegEx",
    "FindReplace": "FindReplace",
    "GenerateRows": "GenerateRows",
    "MultiRowFormula": "MultiRowFormula",
    "MultiFieldFormula": "MultiFieldFormula",
    "RecordID": "RecordID",
    "Transpose": "Transpose",
    "DateTime": "DateTime",
    "DynamicInput": "DynamicInput",
    "DynamicRename": "DynamicRename",
    "AppendFields": "AppendFields",
    "BlockUntilDone": "BlockUntilDone",
    "RunCommand": "RunCommand",
    "Comment": "Comment",
    "TextBox": "TextBox",
    "ToolContainer": "Container",
}

METADATA_FIELDS = {
    "author": "Author",
    "description": "Description",
    "created": "Created",
    "modified": "Modified",
    "category": "CategoryName",
}


def _extract_tool_type(plugin_str: str) -> str:
    """Extract short tool type from plugin string."""
    if not plugin_str:
        return "Unknown"
    # Try known names, longest first so "MultiRowFormula" beats "Formula"
    for key in sorted(PLUGIN_TYPE_MAP, key=len, reverse=True):
        if key in plugin_str:
            return PLUGIN_TYPE_MAP[key]
    # Fallback: last dotted segment
    parts = plugin_str.rsplit(".", 1)
    return parts[-1] or "Unknown"


def _get_text(element, path: str, default: str = "") -> str:
    """Safely get text from an XML path."""
    el = element.find(path)
    if el is not None and el.text:
        return el.text.strip()
    return default


def _get_attr(element, path: str, attr: str, default: str = "") -> str:
    """Safely get attribute from an XML path."""
    el = element.find(path)
    if el is not None:
        return el.get(attr, default)
    return default


def _to_int(value) -> int:
    """Integer part of a coordinate attribute; 0 when missing or not numeric."""
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def _content_of(element) -> str:
    """Plain text of an element, or its inner markup if it has child elements."""
    if len(element) == 0:
        return (element.text or "").strip()
    inner = (element.text or "") + "".join(
        ET.tostring(child, encoding="unicode") for child in element
    )
    return inner.strip()


def _flatten(element) -> dict:
    """Map each direct child's tag to its content."""
    return {child.tag: _content_of(child) for child in element}


def _find_outside_nodes(element, tag: str):
    """First descendant with the given tag, in document order, skipping <Node> subtrees."""
    for child in element:
        if child.tag == "Node":
            continue
        if child.tag == tag:
            return child
        found = _find_outside_nodes(child, tag)
        if found is not None:
            return found
    return None


class AlteryxWorkflowParser:
    """Parses an Alteryx workflow document into an AlteryxWorkflow model."""

    def __init__(self, root: ET.Element):
        self.root = root

    @classmethod
    def from_string(cls, xml_text: str) -> "AlteryxWorkflowParser":
        return cls(parse_xml(xml_text))

    def parse(self) -> AlteryxWorkflow:
        """Walk the document and return the extracted workflow."""
        tools = [self._parse_tool(node) for node in self.root.iter("Node")]
        connections = self._parse_connections()

        workflow = AlteryxWorkflow(
            metadata=self._parse_metadata(),
            tools=tools,
            connections=connections,
            properties=self._parse_properties(),
            constants=self._parse_constants(),
        )

        logger.info(
            f"Parsed workflow: {len(tools)} tools, {len(connections)} connections"
        )
        return workflow

    def _parse_metadata(self) -> AlteryxMetadata:
        metadata = AlteryxMetadata(version=self.root.get("yxmdVer") or None)

        meta_info = _find_outside_nodes(self.root, "MetaInfo")
        if meta_info is None:
            meta_info = self.root.find(".//MetaInfo")
        if meta_info is None:
            return metadata

        for attr, tag in METADATA_FIELDS.items():
            setattr(metadata, attr, _get_text(meta_info, f".//{tag}") or None)
        return metadata

    def _parse_tool(self, node) -> AlteryxTool:
        """Parse a single <Node> element."""
        gui = node.find("GuiSettings")
        plugin = gui.get("Plugin", "") if gui is not None else ""

        position = None
        if gui is not None:
            pos_el = gui.find("Position")
            if pos_el is not None:
                position = {"x": _to_int(pos_el.get("x")), "y": _to_int(pos_el.get("y"))}
            else:
                position = {"x": _to_int(gui.get("X")), "y": _to_int(gui.get("Y"))}

        props = node.find("Properties")
        configuration = _flatten(props) if props is not None else {}

        engine = node.find("EngineSettings")
        engine_settings = dict(engine.attrib) if engine is not None else None

        return AlteryxTool(
            id=node.get("ToolID", ""),
            name=plugin or "Unknown",
            type=_extract_tool_type(plugin),
            plugin=plugin,
            position=position,
            configuration=configuration,
            engine_settings=engine_settings,
        )

    def _parse_connections(self) -> list:
        """Parse all <Connection> elements.

        Endpoints are read from Origin/Destination attributes on the
        connection, falling back to the ToolID of <Origin>/<Destination>
        children as written by Alteryx Designer.
        """
        connections = []
        for conn in self.root.iter("Connection"):
            origin = conn.get("Origin") or _get_attr(conn, "Origin", "ToolID")
            destination = conn.get("Destination") or _get_attr(conn, "Destination", "ToolID")
            origin_output = conn.get("OriginOutput") or _get_attr(conn, "Origin", "Connection")
            destination_input = (conn.get("DestinationInput")
                                 or _get_attr(conn, "Destination", "Connection"))

            connections.append(AlteryxConnection(
                origin=origin,
                destination=destination,
                origin_output=origin_output or None,
                destination_input=destination_input or None,
            ))

        logger.debug(f"Parsed {len(connections)} connections")
        return connections

    def _parse_properties(self) -> dict:
        """Flatten the workflow-level <Properties>, ignoring any inside a tool."""
        props = _find_outside_nodes(self.root, "Properties")
        if props is None:
            return {}
        return _flatten(props)

    def _parse_constants(self) -> Optional[dict]:
        constants = list(self.root.iter("Constant"))
        if not constants:
            return None

        result = {}
        for constant in constants:
            name = constant.get("Name") or _get_text(constant, "Name")
            if not name:
                continue
            if constant.find("Value") is not None:
                result[name] = _get_text(constant, "Value")
            else:
                result[name] = (constant.text or "").strip()
        return result


def parse_alteryx_workflow(xml_text: str) -> AlteryxWorkflow:
    """Parse well-formed Alteryx workflow XML text."""
    return AlteryxWorkflowParser.from_string(xml_text).parse()
