"""Report formatters: terminal, JSON, SARIF, CI annotations, badge."""
