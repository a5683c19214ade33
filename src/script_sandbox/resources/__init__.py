"""Definition files shipped with script-sandbox."""
