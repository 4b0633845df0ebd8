# XML to JSON Converter
#
# Modules:
#   converter  - Conversion façade (validation, caching, dispatch, formatting)
#   detector   - Alteryx workflow vs. generic XML detection
#   mapper     - Generic recursive XML -> JSON mapper
#   parser     - Alteryx .yxmd workflow extractor
#   models     - Data models (JSON values, AlteryxWorkflow, ConversionResult)
#   cache      - Time-limited conversion cache
#   xmltree    - Namespace-preserving XML parsing into ElementTree
#   errors     - Conversion exceptions
#   config     - YAML configuration
#   utils      - CLI utilities
