"""Evolution families, learnsets and the enriched record view."""
