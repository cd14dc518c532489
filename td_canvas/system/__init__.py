"""Layout, rendering sinks and event routing."""
