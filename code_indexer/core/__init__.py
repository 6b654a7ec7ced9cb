"""Core indexing pipeline: chunking, bounded fan-out and orchestration."""
