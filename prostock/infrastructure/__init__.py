"""Infrastructure adapters: backend RPC, LLM, storage and export."""
