"""meta_scout.parser: structural text extraction and cleaning."""
