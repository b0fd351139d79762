"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, Alt/Ctrl combos, and SGR mouse events.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
MAX_SEQUENCE_BYTES = 32
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x06": "CTRL_F",
    b"\x12": "CTRL_R",
    b"\x15": "CTRL_U",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\t": "TAB",
}

_CSI_FINAL_KEYS = {
    "A": "UP",
    "B": "DOWN",
    "C": "RIGHT",
    "D": "LEFT",
    "H": "HOME",
    "F": "END",
}

_CSI_TILDE_KEYS = {
    "1": "HOME",
    "7": "HOME",
    "4": "END",
    "8": "END",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
    "3": "DELETE",
}

# xterm modifier parameter: 3 = Alt, 5 = Ctrl.
_MODIFIER_PREFIXES = {"3": "ALT_", "5": "CTRL_", "9": "ALT_"}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _next_byte(fd: int, timeout_ms: int | None) -> bytes | None:
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    if timeout_ms is not None:
        return _read_ready_byte(fd, timeout_ms)
    ch = os.read(fd, 1)
    return ch or None


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_char(fd: int, first: bytes) -> str:
    """Decode one (possibly multi-byte) UTF-8 character starting with ``first``."""
    raw = bytearray(first)
    for _ in range(_utf8_length(first[0]) - 1):
        more = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if more is None:
            break
        raw.extend(more)
    return bytes(raw).decode("utf-8", errors="replace")


def _decode_mouse(payload: str, final: str) -> str:
    """Decode an SGR mouse report ``btn;col;row`` ending in ``M`` or ``m``."""
    try:
        btn_s, col_s, row_s = payload.split(";")
        btn = int(btn_s)
        col = int(col_s)
        row = int(row_s)
    except ValueError:
        return "MOUSE"
    button = btn & 0b11
    if btn & 0b0100_0000:
        if button == 0:
            return f"MOUSE_WHEEL_UP:{col}:{row}"
        if button == 1:
            return f"MOUSE_WHEEL_DOWN:{col}:{row}"
        return "MOUSE"
    name = {0: "LEFT", 1: "MIDDLE", 2: "RIGHT"}.get(button)
    if name is None:
        return "MOUSE"
    if btn & 0b0010_0000:
        action = "DRAG"
    else:
        action = "DOWN" if final == "M" else "UP"
    return f"MOUSE_{name}_{action}:{col}:{row}"


def _read_csi(fd: int) -> str:
    """Decode the remainder of an ``ESC [`` control sequence."""
    params: list[str] = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None or len(params) > MAX_SEQUENCE_BYTES:
            return "ESC"
        ch = part.decode("ascii", errors="replace")
        # Final byte of a CSI sequence lies in 0x40-0x7E.
        if "@" <= ch <= "~":
            break
        params.append(ch)
    body = "".join(params)

    if body.startswith("<"):
        return _decode_mouse(body[1:], ch)

    fields = body.split(";")
    modifier = _MODIFIER_PREFIXES.get(fields[1], "") if len(fields) > 1 else ""
    if ch == "~":
        key = _CSI_TILDE_KEYS.get(fields[0])
    else:
        key = _CSI_FINAL_KEYS.get(ch)
    if key is None:
        return "UNKNOWN"
    return f"{modifier}{key}"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token, or ``""`` when ``timeout_ms`` elapses first."""
    ch = _next_byte(fd, timeout_ms)
    if ch is None:
        return ""

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        return _decode_char(fd, ch)

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ESC"
        return _CSI_FINAL_KEYS.get(final.decode("ascii", errors="replace"), "UNKNOWN")
    if seq == b"\x08":
        return "CTRL_ALT_H"
    if seq == b"\x1b":
        _PENDING_BYTES.append(seq)
        return "ESC"
    if seq in _CONTROL_KEYS:
        _PENDING_BYTES.append(seq)
        return "ESC"
    return f"ALT_{_decode_char(fd, seq)}"


def drain_keys(fd: int) -> int:
    """Discard every key that is already waiting on ``fd``; return the count."""
    drained = 0
    _PENDING_BYTES.clear()
    while _read_ready_byte(fd, 0) is not None:
        drained += 1
    return drained


__all__ = ["read_key", "drain_keys", "ESC_SEQUENCE_TIMEOUT_MS"]
