"""PowerShell scripts for Windows toast and popup notifications.

User text is embedded base64-encoded so quoting never breaks the script.
"""

from __future__ import annotations

import base64

_TOAST_TEMPLATE = """$ErrorActionPreference = 'Stop'
$null = [Windows.UI.Notifications.ToastNotificationManager, Windows.UI.Notifications, ContentType = WindowsRuntime]
$null = [Windows.Data.Xml.Dom.XmlDocument, Windows.Data.Xml.Dom.XmlDocument, ContentType = WindowsRuntime]
$title = [System.Text.Encoding]::UTF8.GetString([System.Convert]::FromBase64String('{title}'))
$body = [System.Text.Encoding]::UTF8.GetString([System.Convert]::FromBase64String('{body}'))
$appId = [System.Text.Encoding]::UTF8.GetString([System.Convert]::FromBase64String('{app_id}'))
$xmlContent = "<toast><visual><binding template='ToastGeneric'><text></text><text></text></binding></visual></toast>"
$xml = New-Object Windows.Data.Xml.Dom.XmlDocument
$xml.LoadXml($xmlContent)
$textNodes = $xml.GetElementsByTagName('text')
$null = $textNodes.Item(0).AppendChild($xml.CreateTextNode($title))
$null = $textNodes.Item(1).AppendChild($xml.CreateTextNode($body))
$toast = [Windows.UI.Notifications.ToastNotification]::new($xml)
[Windows.UI.Notifications.ToastNotificationManager]::CreateToastNotifier($appId).Show($toast)
"""

_POPUP_TEMPLATE = """$ErrorActionPreference = 'Stop'
$title = [System.Text.Encoding]::UTF8.GetString([System.Convert]::FromBase64String('{title}'))
$body = [System.Text.Encoding]::UTF8.GetString([System.Convert]::FromBase64String('{body}'))
$wshell = New-Object -ComObject WScript.Shell
$null = $wshell.Popup($body, 8, $title, 0x40)
"""


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def build_toast_script(title: str, body: str, app_id: str) -> str:
    return _TOAST_TEMPLATE.format(title=_b64(title), body=_b64(body), app_id=_b64(app_id))


def build_popup_script(title: str, body: str) -> str:
    return _POPUP_TEMPLATE.format(title=_b64(title), body=_b64(body))


def encode_powershell_command(script: str) -> str:
    """Base64 of the UTF-16LE script, as ``-EncodedCommand`` expects."""
    return base64.b64encode(script.encode("utf-16-le")).decode("ascii")


def powershell_args(script: str) -> list[str]:
    return [
        "-NoProfile",
        "-NonInteractive",
        "-ExecutionPolicy",
        "Bypass",
        "-EncodedCommand",
        encode_powershell_command(script),
    ]
