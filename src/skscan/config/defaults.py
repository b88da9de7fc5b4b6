"""Starter .skscan.toml template written by ``skscan init``."""

DEFAULT_TOML = """\
# skscan configuration
version = "1.0"

[scan]
strict = false            # any finding fails the run
max_file_size_kb = 512    # larger files are skipped

[output]
format = "pretty"         # pretty | json | sarif
show_snippets = true

[rules]
# Per-rule overrides: "off" drops findings, "warn" downgrades to medium.
# "secrets/high-entropy" = "warn"
# "network/fetch" = "off"

[ignore]
# paths = ["test/**", "examples/*.md"]

[ci]
annotations = true        # ::error / ::warning lines under GitHub Actions
step_summary = true       # markdown table appended to $GITHUB_STEP_SUMMARY
"""
