"""Dangerous-code rules: dynamic evaluation, shell execution, privilege and persistence."""

from __future__ import annotations

import re

from skscan.rules.models import JS_EXTENSIONS, PY_EXTENSIONS, Rule

# Targets that make a recursive forced delete destructive.
_DANGEROUS_RM_TARGETS = frozenset({"/", "~", "~/"})

_GLOB_CHARS = ("*", "?")


def is_dangerous_rm_target(target: str) -> bool:
    """True for root, home, wildcard and variable targets of ``rm -rf``."""
    target = target.strip("\"'")
    if not target:
        return False
    if target in _DANGEROUS_RM_TARGETS or any(c in target for c in _GLOB_CHARS):
        return True
    return target.startswith(("~", "$"))


def _rm_is_destructive(match: re.Match[str]) -> bool:
    short = ""
    long_flags = set()
    for flag in match.group("flags").split():
        if flag.startswith("--"):
            long_flags.add(flag)
        else:
            short += flag.lstrip("-")
    recursive = "r" in short or "R" in short or "--recursive" in long_flags
    force = "f" in short or "--force" in long_flags
    if not (recursive and force):
        return False
    return any(is_dangerous_rm_target(t) for t in match.group("targets").split())


EVAL_JS = Rule(
    id="dangerous-code/eval-js",
    name="Dynamic code evaluation",
    description="Dynamic code evaluation detected (eval/new Function)",
    category="permissions",
    group="dangerous-code",
    severity="high",
    pattern=r"\beval\s*\(|\bnew\s+Function\s*\(",
    extensions=JS_EXTENSIONS,
)

EVAL_PY = Rule(
    id="dangerous-code/eval-py",
    name="Python dynamic execution",
    description="Python dynamic code execution detected (exec/compile/eval)",
    category="permissions",
    group="dangerous-code",
    severity="high",
    # attribute calls such as re.compile( are not builtins
    pattern=r"(?<![\w.])(?:exec|compile|eval)\s*\(",
    extensions=PY_EXTENSIONS,
)

SUBPROCESS_SHELL = Rule(
    id="dangerous-code/subprocess-shell",
    name="Shell command execution",
    description="Shell command execution with subprocess/os.system detected",
    category="permissions",
    group="dangerous-code",
    severity="high",
    pattern=r"\bsubprocess\b.*\bshell\s*=\s*True|\bos\.system\s*\(",
    extensions=PY_EXTENSIONS,
)

CHILD_PROCESS = Rule(
    id="dangerous-code/child-process",
    name="Dynamic subprocess execution",
    description="child_process.exec with dynamic input detected",
    category="permissions",
    group="dangerous-code",
    severity="medium",
    pattern=(
        r"child_process.*\.exec\s*\(\s*`"
        r"|child_process.*\.exec\s*\([^)]*\$"
        r"|child_process.*\.exec\s*\([^)]*\+"
    ),
    extensions=JS_EXTENSIONS,
)

CURL_PIPE = Rule(
    id="dangerous-code/curl-pipe",
    name="Remote code piped to shell",
    description="Remote code piped to shell detected (curl/wget | sh)",
    category="permissions",
    group="dangerous-code",
    severity="critical",
    pattern=r"\b(?:curl|wget)\b[^|\n]*\|\s*(?:sudo\s+)?(?:bash|sh|zsh|python[0-9.]*)\b",
)

RM_RF = Rule(
    id="dangerous-code/rm-rf",
    name="Destructive rm -rf",
    description="Destructive rm -rf targeting root, home, wildcard or variable path detected",
    category="filesystem",
    group="dangerous-code",
    severity="critical",
    pattern=r"\brm\s+(?P<flags>(?:--?[A-Za-z][A-Za-z-]*\s+)+)(?P<targets>[^;&|\n]*)",
    guard=_rm_is_destructive,
)

CHMOD_777 = Rule(
    id="dangerous-code/chmod-777",
    name="World-writable permissions",
    description="World-writable permissions (chmod 777) detected",
    category="permissions",
    group="dangerous-code",
    severity="medium",
    pattern=r"\bchmod\s+(?:-[A-Za-z]+\s+)*0?777\b|\bos\.chmod\s*\([^)]*\b0o777\b",
)

CHMOD_SETUID = Rule(
    id="dangerous-code/chmod-setuid",
    name="Setuid / setgid bit",
    description="Setuid or setgid permission bit (chmod +s) detected",
    category="permissions",
    group="dangerous-code",
    severity="critical",
    pattern=r"\bchmod\s+(?:-[A-Za-z]+\s+)*(?:[ugoa]*\+[rwxXt]*s|[2467][0-7]{3}\b)",
)

SENSITIVE_FILE_READ = Rule(
    id="dangerous-code/sensitive-file-read",
    name="Sensitive file access",
    description="Sensitive file or directory access detected",
    category="filesystem",
    group="dangerous-code",
    severity="high",
    pattern=(
        r"~/\.(?:ssh|aws|gnupg)\b"
        r"|\$(?:HOME|\{HOME\})/\.(?:ssh|aws|gnupg)\b"
        r"|%USERPROFILE%[/\\]\.(?:ssh|aws)\b"
        r"|/etc/(?:passwd|shadow)\b"
    ),
)

SUDO = Rule(
    id="dangerous-code/sudo",
    name="Privilege escalation",
    description="Privilege escalation via sudo detected",
    category="permissions",
    group="dangerous-code",
    severity="high",
    pattern=r"\bsudo\b",
)

CHOWN_ROOT = Rule(
    id="dangerous-code/chown-root",
    name="Ownership change to root",
    description="Ownership change to root (chown root) detected",
    category="permissions",
    group="dangerous-code",
    severity="high",
    pattern=r"\bchown\s+(?:-[A-Za-z]+\s+)*root\b",
)

PATH_TAMPER = Rule(
    id="dangerous-code/path-tamper",
    name="PATH modification",
    description="PATH environment variable modification detected",
    category="permissions",
    group="dangerous-code",
    severity="high",
    pattern=r"(?<![\w$])PATH=",
)

LD_PRELOAD = Rule(
    id="dangerous-code/ld-preload",
    name="LD_PRELOAD injection",
    description="LD_PRELOAD library injection detected",
    category="permissions",
    group="dangerous-code",
    severity="critical",
    pattern=r"\bLD_PRELOAD\s*=",
)

DYLD_TAMPER = Rule(
    id="dangerous-code/dyld-tamper",
    name="DYLD library path modification",
    description="DYLD_LIBRARY_PATH modification detected",
    category="permissions",
    group="dangerous-code",
    severity="high",
    pattern=r"\bDYLD_(?:LIBRARY_PATH|INSERT_LIBRARIES)\s*=",
)

CRONTAB = Rule(
    id="dangerous-code/crontab",
    name="Cron persistence",
    description="Crontab modification detected (persistence)",
    category="permissions",
    group="dangerous-code",
    severity="high",
    pattern=r"\bcrontab\b",
)

_PROFILE = r"\.(?:bashrc|zshrc|bash_profile|profile)\b"
_HOME = r"""["']?(?:~|\$HOME|\$\{HOME\})/"""

SHELL_PROFILE = Rule(
    id="dangerous-code/shell-profile",
    name="Shell profile append",
    description="Shell profile modification detected (persistence)",
    category="permissions",
    group="dangerous-code",
    severity="high",
    pattern=(
        rf">>\s*{_HOME}{_PROFILE}"
        rf"|\btee\s+(?:-[A-Za-z]+\s+)*(?:-a|--append)\s+{_HOME}{_PROFILE}"
        rf"""|\bopen\s*\([^\n]*{_PROFILE}[^\n]*,\s*["']a"""
    ),
)

LAUNCH_AGENT = Rule(
    id="dangerous-code/launch-agent",
    name="macOS launch agent",
    description="macOS LaunchAgents/LaunchDaemons modification detected (persistence)",
    category="permissions",
    group="dangerous-code",
    severity="high",
    pattern=r"\bLaunch(?:Agents|Daemons)\b",
)

SYSTEMD_ENABLE = Rule(
    id="dangerous-code/systemd-enable",
    name="systemd service",
    description="systemd service installation detected (persistence)",
    category="permissions",
    group="dangerous-code",
    severity="high",
    pattern=r"\bsystemctl\s+(?:--[\w-]+\s+)*enable\b|/etc/systemd/",
)

GIT_HOOKS = Rule(
    id="dangerous-code/git-hooks",
    name="Git hook write",
    description="Git hooks modification detected (persistence)",
    category="filesystem",
    group="dangerous-code",
    severity="medium",
    pattern=r"\.git/hooks/",
)

ALL_DANGEROUS_CODE_RULES = [
    EVAL_JS,
    EVAL_PY,
    SUBPROCESS_SHELL,
    CHILD_PROCESS,
    CURL_PIPE,
    RM_RF,
    CHMOD_777,
    CHMOD_SETUID,
    SENSITIVE_FILE_READ,
    SUDO,
    CHOWN_ROOT,
    PATH_TAMPER,
    LD_PRELOAD,
    DYLD_TAMPER,
    CRONTAB,
    SHELL_PROFILE,
    LAUNCH_AGENT,
    SYSTEMD_ENABLE,
    GIT_HOOKS,
]
