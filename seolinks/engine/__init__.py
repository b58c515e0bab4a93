"""Internal link engine: URL routing, link group builders and the page orchestrator."""
