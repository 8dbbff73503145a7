"""Services Layer — model-backed chunk analysis and the analysis pipeline."""
