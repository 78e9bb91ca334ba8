"""HeritageBox automation hub - Airtable, SendGrid, Dropbox and Shippo webhooks."""

__version__ = "1.1.0"
