"""
Window inspector for a single TOTP secret.

Layout
------
┌──────────────────────────────────────────────────┐
│  SHA1 · 6 digits · 30 s · ±1 step(s)             │
│                 123 456          ▓▓▓▓░░░  28 s   │
├──────────────────────────────────────────────────┤
│  Offset │ Code                                   │
│    -1   │ 481 220                                │
│    +0   │ 123 456   ← current                    │
│    +1   │ 907 113                                │
├──────────────────────────────────────────────────┤
│  [ code to check ]                     [Verify]  │
└──────────────────────────────────────────────────┘
"""

import logging
from dataclasses import dataclass
from typing import Optional

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from core.totp import (
    Algorithm,
    enumerate_valid_codes,
    remaining_seconds,
    verify_totp,
)
from core.utils import (
    SecretLike,
    encode_secret,
    format_otp,
    validate_digits,
    validate_time_step,
    validate_window,
)

logger = logging.getLogger(__name__)

_REFRESH_INTERVAL_MS = 1_000
_LOW_REMAINING_S = 5


@dataclass
class OTPProfile:
    """Parameters the inspector renders codes for."""

    secret: SecretLike
    digits: int = 6
    time_step: int = 30
    window_size: int = 1
    algorithm: Algorithm = Algorithm.SHA1

    def validate(self) -> None:
        """Raise :class:`core.errors.TOTPError` if any parameter is unusable."""
        encode_secret(self.secret)
        validate_digits(self.digits)
        validate_time_step(self.time_step)
        validate_window(self.window_size)

    def describe(self) -> str:
        return (
            f"{self.algorithm.value} · {self.digits} digits · "
            f"{self.time_step} s · ±{self.window_size} step(s)"
        )


class MainWindow(QMainWindow):
    """Shows the current code, its countdown and every code in the window."""

    def __init__(self, profile: OTPProfile, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._profile = profile
        self._setup_ui()
        self.refresh()
        self._start_refresh_timer()

    # ── UI construction ───────────────────────────────────────────────

    def _setup_ui(self) -> None:
        self.setWindowTitle("totpgen – window inspector")
        self.setMinimumSize(420, 420)

        central = QWidget()
        self.setCentralWidget(central)
        root = QVBoxLayout(central)
        root.setContentsMargins(20, 16, 20, 16)
        root.setSpacing(12)

        lbl_params = QLabel(self._profile.describe())
        lbl_params.setObjectName("lbl_params")
        root.addWidget(lbl_params)

        # Current code + countdown
        code_row = QHBoxLayout()
        code_row.setSpacing(12)

        self._lbl_code = QLabel("— — —")
        self._lbl_code.setObjectName("lbl_code")
        self._lbl_code.setTextInteractionFlags(
            Qt.TextInteractionFlag.TextSelectableByMouse
        )
        code_row.addWidget(self._lbl_code)
        code_row.addStretch()

        right_col = QVBoxLayout()
        right_col.setSpacing(2)
        self._progress = QProgressBar()
        self._progress.setFixedWidth(100)
        self._progress.setTextVisible(False)
        self._progress.setMaximum(self._profile.time_step)
        right_col.addWidget(self._progress)

        self._lbl_remaining = QLabel("")
        self._lbl_remaining.setObjectName("lbl_remaining")
        self._lbl_remaining.setAlignment(Qt.AlignmentFlag.AlignCenter)
        right_col.addWidget(self._lbl_remaining)

        code_row.addLayout(right_col)
        root.addLayout(code_row)

        # Window table
        rows = 2 * self._profile.window_size + 1
        self._table = QTableWidget(rows, 2)
        self._table.setHorizontalHeaderLabels(["Offset", "Code"])
        self._table.verticalHeader().setVisible(False)
        self._table.horizontalHeader().setStretchLastSection(True)
        self._table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        root.addWidget(self._table)

        # Verification
        verify_row = QHBoxLayout()
        self._input = QLineEdit()
        self._input.setPlaceholderText("Code to check…")
        self._input.setMaxLength(self._profile.digits)
        self._input.returnPressed.connect(self._on_verify)
        verify_row.addWidget(self._input)

        btn_verify = QPushButton("Verify")
        btn_verify.setObjectName("btn_primary")
        btn_verify.clicked.connect(self._on_verify)
        verify_row.addWidget(btn_verify)
        root.addLayout(verify_row)

        self._lbl_result = QLabel("")
        self._lbl_result.setObjectName("lbl_result")
        root.addWidget(self._lbl_result)

    def _start_refresh_timer(self) -> None:
        self._timer = QTimer(self)
        self._timer.timeout.connect(self.refresh)
        self._timer.start(_REFRESH_INTERVAL_MS)

    # ── Public API ────────────────────────────────────────────────────

    def refresh(self) -> None:
        """Regenerate the window codes and update all visual elements."""
        p = self._profile
        try:
            codes = enumerate_valid_codes(
                p.secret,
                digits=p.digits,
                time_step=p.time_step,
                window_size=p.window_size,
                algorithm=p.algorithm,
            )
        except Exception:
            logger.exception("Failed to generate codes")
            self._lbl_code.setText("ERROR")
            return

        self._lbl_code.setText(format_otp(codes[0]))

        rem = remaining_seconds(p.time_step)
        self._progress.setValue(rem)
        low = rem <= _LOW_REMAINING_S
        self._progress.setProperty("low", str(low).lower())
        self._progress.style().unpolish(self._progress)
        self._progress.style().polish(self._progress)
        self._lbl_remaining.setText(f"{rem}s")

        for row, (offset, code) in enumerate(codes.items()):
            label = f"{offset:+d}" + ("  ← current" if offset == 0 else "")
            self._table.setItem(row, 0, QTableWidgetItem(label))
            self._table.setItem(row, 1, QTableWidgetItem(format_otp(code)))

    # ── Slots ─────────────────────────────────────────────────────────

    def _on_verify(self) -> None:
        p = self._profile
        candidate = self._input.text().replace(" ", "")
        ok = verify_totp(
            candidate,
            p.secret,
            digits=p.digits,
            time_step=p.time_step,
            window_size=p.window_size,
            algorithm=p.algorithm,
        )
        self._lbl_result.setText("Accepted" if ok else "Rejected")
        self._lbl_result.setProperty("ok", str(ok).lower())
        self._lbl_result.style().unpolish(self._lbl_result)
        self._lbl_result.style().polish(self._lbl_result)
