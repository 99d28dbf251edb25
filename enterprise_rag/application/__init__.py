"""Application layer: request orchestration over the core pipelines."""
