"""Core logic: catalog loading, plan resolution, command building and the selection codec."""
