from __future__ import annotations

ERRORS = {
  "E_BLOCK_LINES": "Block must have 3 lines (or 4 with an empty last line)",
  "E_DELAY_LINE": "Delay line malformed",
  "E_LOCATIONS_UNTERMINATED": "Location list is not comma-terminated",
  "E_LOCATION_EMPTY": "Location list contains an empty entry (stricter than the tester's own tooling, which keeps it as a location)",
  "E_LOCATION_DUPLICATE": "Location listed twice in one block",
  "E_CEILING_ORDER": "Truncated location list does not end with its largest location",
  "E_DIFFS_LINE": "Diffs line malformed",
  "E_TRUNCATION": "Diffs count does not match an untruncated location list",
  "E_DATA_INSUFFICIENT": "No eligible observations for cell",
  "E_ENCODING": "Log is not valid UTF-8",
  "E_READ": "Log could not be read",
}


class SimmError(ValueError):
    """Base for fatal log errors. Carries a code from ERRORS."""

    def __init__(self, code: str, detail: str = "", block: int | None = None, line: int | None = None):
        self.code = code
        self.detail = detail
        self.block = block
        self.line = line
        super().__init__(str(self))

    def where(self) -> str:
        if self.block is None:
            return ""
        if self.line is None:
            return f"block {self.block}: "
        return f"block {self.block} (line {self.line}): "

    def __str__(self) -> str:
        msg = ERRORS[self.code]
        if self.detail:
            msg = f"{msg}: {self.detail}"
        return self.where() + msg

    def to_dict(self) -> dict:
        out = {"code": self.code, "message": ERRORS[self.code]}
        if self.detail:
            out["detail"] = self.detail
        if self.block is not None:
            out["block"] = self.block
        if self.line is not None:
            out["line"] = self.line
        return out


class InputFormatError(SimmError):
    pass


class DataInsufficiencyError(SimmError):
    pass
