"""Markdown reformatting engine.

Submodules:
  patterns     -- compiled regex patterns and character classes
  schema       -- Pydantic models for classified lines and document blocks
  classifiers  -- line classification with explicit fence state
  segmenter    -- grouping of classified lines into blocks
  width        -- terminal display width of characters and strings
  tables       -- table column alignment and padding
  lists        -- list marker renumbering, bullets and indentation
  spacing      -- blank-line placement and CJK/Latin boundary spacing
  render       -- serialization of blocks back to text
  pipeline     -- format_markdown() entry point and run statistics
"""
