"""Batch installer emitter.

Renders the resolved plan as a ``.cmd`` script for machines where running
PowerShell scripts is restricted. Every plan item becomes one explicit
``call :install_item`` line with positional parameters:

    call :install_item "<name>" <runner> <verify 0/1> <bucket or -> <args...>

The arguments are prebuilt by :mod:`wingen.core.commands`, so provider, flag
and bucket decisions match the PowerShell installer exactly.
"""

import re

from wingen.core.commands import build_install_args, iter_bucket_additions, runner_for
from wingen.emitters.powershell import LOG_DIR_NAME, LOG_FILE_NAME, RUNNER_REQUIREMENTS
from wingen.models.options import GeneratorOptions
from wingen.models.plan import InstallPlanItem, ResolvedPlan

# Placeholder for "no bucket to add" in the positional parameter list
NO_BUCKET = "-"

_UNSAFE_TEXT = re.compile(r'["%&|<>^!]')
_ARG_DELIMITERS = (" ", ",", ";", "=")

_HEADER = [
    "@echo off",
    "setlocal EnableExtensions",
    "title wingen Installer",
    "rem wingen generated batch installer",
    "rem Review scripts before running.",
    "rem wingen does not execute installers.",
    "",
    "echo ========================================",
    "echo            WINGEN INSTALLER",
    "echo ========================================",
    "echo This script installs selected apps one by one.",
    "echo.",
    "",
    f'set "LOGDIR=%TEMP%\\{LOG_DIR_NAME}"',
    f'set "LOGFILE=%LOGDIR%\\{LOG_FILE_NAME}"',
    'if not exist "%LOGDIR%" mkdir "%LOGDIR%"',
    '>>"%LOGFILE%" echo === wingen run %DATE% %TIME% ===',
    "",
    "net session >nul 2>&1",
    "if errorlevel 1 (",
    "  echo WARNING: Run this script as Administrator for best results.",
    "  echo Tip: Right-click Command Prompt and choose Run as administrator.",
    ") else (",
    "  echo Administrator privileges detected.",
    ")",
    "",
]

_FOOTER = [
    ":summary",
    "echo.",
    "echo Install summary",
    "echo ---------------",
    "echo Succeeded: %SUCCESS_COUNT%",
    "if defined SUCCEEDED echo   %SUCCEEDED:~2%",
    "echo Failed: %FAIL_COUNT%",
    "if defined FAILED echo   %FAILED:~2%",
    "echo Log file: %LOGFILE%",
    "if %FAIL_COUNT% GTR 0 exit /b 1",
    "exit /b 0",
    "",
    ":install_item",
    'set "ITEM_NAME=%~1"',
    'set "ITEM_RUNNER=%~2"',
    'set "ITEM_VERIFY=%~3"',
    'set "ITEM_BUCKET=%~4"',
    "set /a CURRENT+=1",
    "shift",
    "shift",
    "shift",
    "shift",
    'set "ITEM_ARGS="',
    ":collect_args",
    'if "%~1"=="" goto :run_item',
    'set "ITEM_ARGS=%ITEM_ARGS% %1"',
    "shift",
    "goto :collect_args",
    ":run_item",
    "echo [%CURRENT%/%TOTAL%] Installing %ITEM_NAME%",
    'if "%ITEM_VERIFY%"=="1" echo WARNING: %ITEM_NAME% is marked for verification. '
    "Confirm package mapping if needed.",
    f'if "%ITEM_BUCKET%"=="{NO_BUCKET}" goto :run_install',
    "echo Adding Scoop bucket: %ITEM_BUCKET%",
    '>>"%LOGFILE%" echo scoop bucket add %ITEM_BUCKET%',
    'call scoop bucket add %ITEM_BUCKET% >>"%LOGFILE%" 2>&1',
    'if not "%ERRORLEVEL%"=="0" goto :bucket_failed',
    ":run_install",
    '>>"%LOGFILE%" echo %ITEM_RUNNER%%ITEM_ARGS%',
    'call %ITEM_RUNNER%%ITEM_ARGS% >>"%LOGFILE%" 2>&1',
    'set "ITEM_EXIT=%ERRORLEVEL%"',
    'if "%ITEM_EXIT%"=="0" goto :item_ok',
    "echo FAIL: %ITEM_NAME% (exit %ITEM_EXIT%)",
    "goto :item_failed",
    ":bucket_failed",
    "echo ERROR: Failed to add Scoop bucket %ITEM_BUCKET%.",
    ":item_failed",
    "set /a FAIL_COUNT+=1",
    'set "FAILED=%FAILED%, %ITEM_NAME%"',
    'if "%CONTINUE_ON_ERROR%"=="0" set "STOP=1"',
    "goto :eof",
    ":item_ok",
    "echo OK: %ITEM_NAME%",
    "set /a SUCCESS_COUNT+=1",
    'set "SUCCEEDED=%SUCCEEDED%, %ITEM_NAME%"',
    "goto :eof",
]


def batch_text(value: str) -> str:
    """Strip characters that cmd would interpret inside a display string."""
    return _UNSAFE_TEXT.sub("", value).strip()


def block_echo(text: str) -> str:
    """Escape parentheses for an echo inside a parenthesized block."""
    return text.replace("(", "^(").replace(")", "^)")


def batch_arg(value: str) -> str:
    """Quote an argument when cmd would split it into several parameters."""
    if any(delimiter in value for delimiter in _ARG_DELIMITERS):
        return f'"{value}"'
    return value


def _install_call(
    item: InstallPlanItem, add_bucket: str | None, options: GeneratorOptions
) -> str:
    params = [
        f'"{batch_text(item.record.name)}"',
        runner_for(item),
        "1" if item.record.needs_verification else "0",
        add_bucket or NO_BUCKET,
        *(batch_arg(arg) for arg in build_install_args(item, options)),
    ]
    return "call :install_item " + " ".join(params)


def _requirement_checks(resolved: ResolvedPlan) -> list[str]:
    lines: list[str] = []
    for kind in resolved.required_providers:
        message, hint = RUNNER_REQUIREMENTS[kind]
        lines.extend(
            [
                f"where {kind.value} >nul 2>&1",
                "if errorlevel 1 (",
                f"  echo ERROR: {block_echo(message)}",
                f"  echo {block_echo(hint)}",
                "  exit /b 1",
                ")",
            ]
        )
    return lines


def emit_batch(resolved: ResolvedPlan, options: GeneratorOptions) -> str:
    """Render the batch installer.

    Args:
        resolved: Resolver output.
        options: Generator options.

    Returns:
        The ``.cmd`` script text.
    """
    lines = list(_HEADER)

    if not options.include_ms_store_apps and resolved.skipped:
        names = ", ".join(batch_text(skipped.record.name) for skipped in resolved.skipped)
        lines.extend([f"rem Skipped msstore apps without fallback: {names}", ""])

    checks = _requirement_checks(resolved)
    if checks:
        lines.extend([*checks, ""])

    lines.extend(
        [
            f'set "CONTINUE_ON_ERROR={1 if options.continue_on_error else 0}"',
            'set "STOP=0"',
            f"set /a TOTAL={len(resolved.plan)}",
            "set /a CURRENT=0",
            "set /a SUCCESS_COUNT=0",
            "set /a FAIL_COUNT=0",
            'set "SUCCEEDED="',
            'set "FAILED="',
            "",
        ]
    )

    if resolved.is_empty:
        lines.extend(
            [
                "echo WARNING: No installable apps were generated for this selection.",
                "exit /b 0",
                "",
            ]
        )

    for item, add_bucket in iter_bucket_additions(resolved.plan):
        lines.append(_install_call(item, add_bucket, options))
        lines.append('if "%STOP%"=="1" goto :summary')

    lines.append("")
    lines.extend(_FOOTER)

    return "\r\n".join(lines)
