"""CSS styles for the Wallet Explorer application."""

CSS = """
Screen {
    background: #1e1e2e;
}

Header {
    background: #181825;
    text-style: bold;
}

Footer {
    background: #181825;
}

#wallets-title, #detail-title, #tx-title, #segment-title {
    color: #cdd6f4;
    text-style: bold;
    padding: 1 2;
}

#detail-address {
    color: #a6adc8;
    padding: 0 2;
}

#detail-header {
    height: 4;
    padding: 0 2;
}

.detail-stat {
    width: 1fr;
    color: #a6e3a1;
}

.section-title {
    color: #89b4fa;
    text-style: bold;
    padding: 1 2 0 2;
}

.metadata-row {
    color: #cdd6f4;
    padding: 0 4;
}

DataTable {
    height: 1fr;
    margin: 0 1;
}

ModalScreen {
    align: center middle;
}

#select-dialog, #scanner-dialog, #notice-dialog {
    width: 60;
    height: auto;
    background: #313244;
    border: thick #89b4fa;
    padding: 1 2;
}

#select-title, #scanner-title, #notice-title {
    text-style: bold;
    color: #f5e0dc;
}

#notice-message, #scanner-status {
    margin: 1 0;
}

#qr-display {
    width: auto;
    height: auto;
}
"""
