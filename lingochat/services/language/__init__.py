"""Language detection, translation strategies and the auto-translate orchestrator."""
