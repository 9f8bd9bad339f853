"""meta_scout.crawler: fetching, link resolution and depth-first traversal."""
