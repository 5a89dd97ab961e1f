"""Automation script builders for macOS and Windows.

The URL is embedded in script source, so each builder quotes it for the
target language before interpolation.
"""

from tabrelay.config import BrowserConfig

# Characters SendKeys interprets as modifiers or grouping
_SENDKEYS_SPECIAL = frozenset("+^%~()[]{}")

_KEYSTROKE_DELAY_SECONDS = 0.1
_KEYSTROKE_DELAY_MS = 100


def applescript_quote(s: str) -> str:
    """Escape a string so it survives inside AppleScript double quotes."""
    return s.replace("\\", "\\\\").replace('"', '\\"')


def powershell_quote(s: str) -> str:
    """Wrap a string in PowerShell single quotes, doubling embedded quotes."""
    return "'" + s.replace("'", "''") + "'"


def sendkeys_escape(s: str) -> str:
    """Escape SendKeys metacharacters so the text is typed literally."""
    return "".join(f"{{{c}}}" if c in _SENDKEYS_SPECIAL else c for c in s)


def build_applescript(url: str, browser: BrowserConfig) -> str:
    """Build the AppleScript that activates the browser and types the URL.

    Args:
        url: Target URL
        browser: Browser identity (uses app_name)

    Returns:
        Script source for `osascript -e`
    """
    app = applescript_quote(browser.app_name)
    delay = _KEYSTROKE_DELAY_SECONDS
    return f"""
tell application "{app}"
    activate
    tell application "System Events"
        tell process "{app}"
            keystroke "l" using command down
            delay {delay}
            keystroke "a" using command down
            delay {delay}
            keystroke "{applescript_quote(url)}"
            delay {delay}
            keystroke return
        end tell
    end tell
end tell"""


def build_powershell_script(url: str, browser: BrowserConfig) -> str:
    """Build the PowerShell script that focuses the browser and types the URL.

    Falls back to starting a new browser instance when no process owns a
    visible main window.

    Args:
        url: Target URL
        browser: Browser identity (uses image_name)

    Returns:
        Script source for `powershell -Command`
    """
    process_name = browser.image_name.removesuffix(".exe")
    typed = powershell_quote(sendkeys_escape(url))
    sleep = _KEYSTROKE_DELAY_MS
    return f"""
Add-Type -AssemblyName System.Windows.Forms
$browser = Get-Process {powershell_quote(process_name)} | Where-Object {{$_.MainWindowHandle -ne 0}} | Select-Object -First 1
if ($browser) {{
    [void][System.Reflection.Assembly]::LoadWithPartialName('Microsoft.VisualBasic')
    [Microsoft.VisualBasic.Interaction]::AppActivate($browser.Id)
    Start-Sleep -Milliseconds {sleep}
    [System.Windows.Forms.SendKeys]::SendWait('^l')
    Start-Sleep -Milliseconds {sleep}
    [System.Windows.Forms.SendKeys]::SendWait('^a')
    Start-Sleep -Milliseconds {sleep}
    [System.Windows.Forms.SendKeys]::SendWait({typed})
    Start-Sleep -Milliseconds {sleep}
    [System.Windows.Forms.SendKeys]::SendWait('{{ENTER}}')
}} else {{
    Start-Process {powershell_quote(browser.image_name)} -ArgumentList {powershell_quote(url)}
}}"""
