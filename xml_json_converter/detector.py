"""
File-type detection: Alteryx workflow vs. generic XML.

Detection is a substring check over the raw text, so a generic document that
mentions one of the markers in its content is classified as a workflow.
"""

ALTERYX_WORKFLOW = "alteryx-workflow"
GENERIC = "generic"

ALTERYX_MARKERS = (
    "AlteryxDocument",
    "<Node ToolID=",
    "<Connection Origin=",
    "GuiSettings Plugin=",
    "yxmdVer=",
    "EngineSettings EngineDll=",
)


def detect_file_type(xml_text: str) -> str:
    """Return ALTERYX_WORKFLOW if any marker occurs in the text, else GENERIC."""
    if any(marker in xml_text for marker in ALTERYX_MARKERS):
        return ALTERYX_WORKFLOW
    return GENERIC


def is_alteryx_workflow(xml_text: str) -> bool:
    return detect_file_type(xml_text) == ALTERYX_WORKFLOW
