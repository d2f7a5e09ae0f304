"""
Qt stylesheet for the window inspector.
"""

DARK_STYLESHEET = """
/* ── Global ──────────────────────────────────────────────────────── */
QWidget {
    background-color: #1e1e2e;
    color: #cdd6f4;
    font-family: "Segoe UI", "SF Pro Display", "Ubuntu", sans-serif;
    font-size: 14px;
}

/* ── Buttons ─────────────────────────────────────────────────────── */
QPushButton#btn_primary {
    background-color: #89b4fa;
    color: #1e1e2e;
    border: none;
    border-radius: 8px;
    padding: 8px 16px;
    font-weight: 700;
}
QPushButton#btn_primary:hover {
    background-color: #b4befe;
}

/* ── Input fields ────────────────────────────────────────────────── */
QLineEdit {
    background-color: #313244;
    border: 1px solid #45475a;
    border-radius: 8px;
    padding: 8px 12px;
}
QLineEdit:focus {
    border-color: #89b4fa;
}

/* ── Labels ──────────────────────────────────────────────────────── */
QLabel#lbl_code {
    font-size: 40px;
    font-weight: 700;
    letter-spacing: 6px;
    color: #cba6f7;
    qproperty-alignment: AlignCenter;
}
QLabel#lbl_params {
    font-size: 12px;
    color: #7f849c;
}
QLabel#lbl_remaining {
    font-size: 12px;
    color: #a6e3a1;
}
QLabel#lbl_result[ok="true"] {
    color: #a6e3a1;
}
QLabel#lbl_result[ok="false"] {
    color: #f38ba8;
}

/* ── Window table ────────────────────────────────────────────────── */
QTableWidget {
    background-color: #24273a;
    border: 1px solid #313244;
    border-radius: 12px;
    gridline-color: #313244;
}
QHeaderView::section {
    background-color: #181825;
    color: #7f849c;
    border: none;
    padding: 6px;
}

/* ── Progress bar ────────────────────────────────────────────────── */
QProgressBar {
    background-color: #313244;
    border: none;
    border-radius: 4px;
    height: 6px;
}
QProgressBar::chunk {
    background-color: #a6e3a1;
    border-radius: 4px;
}
QProgressBar[low="true"]::chunk {
    background-color: #f38ba8;
}
"""
