"""PowerShell installer emitter.

Renders the resolved plan as an interactive ``.ps1`` script. The plan is
embedded as a data table whose argument lists are prebuilt by
:mod:`wingen.core.commands`; the script itself only runs them and reports.
"""

from wingen.core.commands import build_install_args, iter_bucket_additions, runner_for
from wingen.models.options import GeneratorOptions
from wingen.models.package import ProviderKind
from wingen.models.plan import InstallPlanItem, ResolvedPlan

LOG_DIR_NAME = "wingen"
LOG_FILE_NAME = "wingen-install.log"

# Missing package manager: (error message, install hint)
RUNNER_REQUIREMENTS: dict[ProviderKind, tuple[str, str]] = {
    ProviderKind.WINGET: (
        "winget was not found on this machine.",
        "Install Microsoft App Installer from https://aka.ms/getwinget",
    ),
    ProviderKind.CHOCO: (
        "Chocolatey (choco) is required for selected apps but was not found.",
        "Install Chocolatey from https://chocolatey.org/install",
    ),
    ProviderKind.SCOOP: (
        "Scoop is required for selected apps but was not found.",
        "Install Scoop from https://scoop.sh/",
    ),
}

_PREAMBLE = [
    "# wingen generated PowerShell installer",
    "# Review scripts before running.",
    "# wingen does not execute installers.",
    "",
    "Set-StrictMode -Version Latest",
    "$ErrorActionPreference = 'Continue'",
    "$host.UI.RawUI.WindowTitle = 'wingen Installer'",
    "",
    "$esc = [char]27",
    "function Paint([string]$Text, [string]$ColorCode) {",
    '  return "$esc[$ColorCode`m$Text$esc[0m"',
    "}",
    "",
    "function Banner {",
    "  Write-Host (Paint '========================================' '96')",
    "  Write-Host (Paint '           WINGEN INSTALLER             ' '96')",
    "  Write-Host (Paint '========================================' '96')",
    "  Write-Host (Paint 'This script installs selected apps one by one.' '90')",
    "  Write-Host ''",
    "}",
    "",
    "Banner",
    "",
    f"$logRoot = Join-Path $env:TEMP '{LOG_DIR_NAME}'",
    f"$logFile = Join-Path $logRoot '{LOG_FILE_NAME}'",
    "New-Item -ItemType Directory -Path $logRoot -Force | Out-Null",
    "'=== wingen run ' + (Get-Date -Format s) + ' ===' | Out-File -FilePath $logFile "
    "-Encoding utf8 -Append",
    "",
    "$identity = [Security.Principal.WindowsIdentity]::GetCurrent()",
    "$principal = New-Object Security.Principal.WindowsPrincipal($identity)",
    "$isAdmin = $principal.IsInRole([Security.Principal.WindowsBuiltInRole]::Administrator)",
    "if (-not $isAdmin) {",
    "  Write-Warning 'Run PowerShell as Administrator for best results.'",
    "  Write-Host (Paint 'Tip: Right-click PowerShell and choose Run as administrator.' '33')",
    "} else {",
    "  Write-Host (Paint 'Administrator privileges detected.' '32')",
    "}",
    "",
    "$success = [System.Collections.Generic.List[string]]::new()",
    "$failed = [System.Collections.Generic.List[string]]::new()",
    "$statusRows = [System.Collections.Generic.List[object]]::new()",
    "",
]

_INSTALL_LOOP = [
    "$total = $installPlan.Count",
    "$current = 0",
    "",
    "foreach ($item in $installPlan) {",
    "  $current += 1",
    "  $progressStart = [Math]::Round((($current - 1) / $total) * 100)",
    "  Write-Progress -Id 1 -Activity 'wingen installing selected apps' "
    "-Status ('Preparing ' + $item.Name) -PercentComplete $progressStart",
    "",
    "  if ($item.NeedsVerification) {",
    "    Write-Warning ('{0} is marked for verification. Confirm package mapping if needed.' "
    "-f $item.Name)",
    "  }",
    "",
    "  Write-Host (Paint ('[{0}/{1}] Installing {2}' -f $current, $total, $item.Name) '96')",
    "",
    "  try {",
    "    if ($item.AddBucket) {",
    "      Write-Host (Paint ('Adding Scoop bucket: {0}' -f $item.AddBucket) '90')",
    "      ('scoop bucket add ' + $item.AddBucket) | Out-File -FilePath $logFile "
    "-Encoding utf8 -Append",
    "      & scoop bucket add $item.AddBucket 2>&1 | Tee-Object -FilePath $logFile -Append",
    "      if ($LASTEXITCODE -ne 0) {",
    '        throw "Failed to add Scoop bucket $($item.AddBucket)."',
    "      }",
    "    }",
    "",
    "    $runArgs = @($item.Args)",
    "    ($item.Runner + ' ' + ($runArgs -join ' ')) | Out-File -FilePath $logFile "
    "-Encoding utf8 -Append",
    "    & $item.Runner @runArgs 2>&1 | Tee-Object -FilePath $logFile -Append",
    "    if ($LASTEXITCODE -eq 0) {",
    "      $success.Add($item.Name) | Out-Null",
    "      $statusRows.Add([pscustomobject]@{ App = $item.Name; Method = $item.Method; "
    "Status = 'OK' }) | Out-Null",
    "      Write-Host (Paint ('OK: ' + $item.Name) '32')",
    "    } else {",
    "      $failed.Add($item.Name) | Out-Null",
    "      $statusRows.Add([pscustomobject]@{ App = $item.Name; Method = $item.Method; "
    "Status = ('Fail (' + $LASTEXITCODE + ')') }) | Out-Null",
    "      Write-Host (Paint ('FAIL: ' + $item.Name + ' (exit ' + $LASTEXITCODE + ')') '31')",
    "      if (-not $continueOnError) {",
    "        break",
    "      }",
    "    }",
    "  } catch {",
    "    $failed.Add($item.Name) | Out-Null",
    "    $statusRows.Add([pscustomobject]@{ App = $item.Name; Method = $item.Method; "
    "Status = 'Error' }) | Out-Null",
    "    Write-Error ('Unexpected error while installing {0}: {1}' -f $item.Name, $_)",
    "    if (-not $continueOnError) {",
    "      break",
    "    }",
    "  }",
    "",
    "  $progressEnd = [Math]::Round(($current / $total) * 100)",
    "  Write-Progress -Id 1 -Activity 'wingen installing selected apps' "
    "-Status ('Completed ' + $item.Name) -PercentComplete $progressEnd",
    "}",
    "",
    "Write-Progress -Id 1 -Activity 'wingen installing selected apps' -Completed",
    "",
]

_SUMMARY = [
    "Write-Host ''",
    "Write-Host (Paint 'Install summary' '96')",
    "Write-Host (Paint '---------------' '96')",
    "$statusRows | Format-Table -AutoSize | Out-String | Write-Host",
    "Write-Host ('Succeeded: {0}' -f $success.Count)",
    "if ($success.Count -gt 0) {",
    "  Write-Host ('  ' + ($success -join ', '))",
    "}",
    "Write-Host ('Failed: {0}' -f $failed.Count)",
    "if ($failed.Count -gt 0) {",
    "  Write-Host ('  ' + ($failed -join ', '))",
    "}",
    "Write-Host ('Log file: {0}' -f $logFile)",
    "if ($failed.Count -gt 0) {",
    "  exit 1",
    "}",
]


def ps_bool(value: bool) -> str:
    """Render a PowerShell boolean literal."""
    return "$true" if value else "$false"


def ps_string(value: str) -> str:
    """Render a single-quoted PowerShell string literal."""
    escaped = value.replace("'", "''")
    return f"'{escaped}'"


def ps_array(values: list[str]) -> str:
    """Render a PowerShell array literal of strings."""
    return "@(" + ", ".join(ps_string(value) for value in values) + ")"


def _plan_entry(
    item: InstallPlanItem, add_bucket: str | None, options: GeneratorOptions
) -> list[str]:
    return [
        "  @{",
        f"    Name = {ps_string(item.record.name)}",
        f"    Method = {ps_string(item.method.value)}",
        f"    Runner = {ps_string(runner_for(item))}",
        f"    Args = {ps_array(build_install_args(item, options))}",
        f"    AddBucket = {ps_string(add_bucket or '')}",
        f"    NeedsVerification = {ps_bool(item.record.needs_verification)}",
        "  }",
    ]


def _plan_table(resolved: ResolvedPlan, options: GeneratorOptions) -> list[str]:
    if resolved.is_empty:
        return ["$installPlan = @()"]

    lines = ["$installPlan = @("]
    for item, add_bucket in iter_bucket_additions(resolved.plan):
        lines.extend(_plan_entry(item, add_bucket, options))
    lines.append(")")
    return lines


def _requirement_checks(resolved: ResolvedPlan) -> list[str]:
    lines: list[str] = []
    for kind in resolved.required_providers:
        message, hint = RUNNER_REQUIREMENTS[kind]
        lines.extend(
            [
                f"if (-not (Get-Command {kind.value} -ErrorAction SilentlyContinue)) {{",
                f"  Write-Error {ps_string(message)}",
                f"  Write-Host {ps_string(hint)}",
                "  exit 1",
                "}",
            ]
        )
    return lines


def emit_powershell(resolved: ResolvedPlan, options: GeneratorOptions) -> str:
    """Render the interactive PowerShell installer.

    The script warns (but continues) without administrator rights, fails
    hard when a required package manager is missing, installs items one by
    one with progress output, honours ``continue_on_error`` and ends with a
    summary of succeeded and failed apps.

    Args:
        resolved: Resolver output.
        options: Generator options.

    Returns:
        The script text.
    """
    lines = [*_PREAMBLE, *_plan_table(resolved, options)]

    if not options.include_ms_store_apps and resolved.skipped:
        names = ", ".join(skipped.record.name for skipped in resolved.skipped)
        lines.extend(["", f"# Skipped msstore apps without fallback: {names}"])

    lines.append("")
    lines.extend(_requirement_checks(resolved))
    lines.extend(
        [
            "",
            f"$continueOnError = {ps_bool(options.continue_on_error)}",
            "",
            "if ($installPlan.Count -eq 0) {",
            "  Write-Warning 'No installable apps were generated for this selection.'",
            "  exit 0",
            "}",
            "",
        ]
    )
    lines.extend(_INSTALL_LOOP)
    lines.extend(_SUMMARY)

    return "\n".join(lines)
