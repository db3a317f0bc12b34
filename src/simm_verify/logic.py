from pathlib import Path
from simm_core.errors import ERRORS, InputFormatError
from simm_core.record import parse_record, split_blocks
from simm_analyse.corruptability import generate_corruptability

def _verdict(errors: list[dict], **extra) -> dict:
    out = {"status": "FAIL" if errors else "PASS", "error_count": len(errors), "errors": errors}
    out.update(extra)
    return out

def check_text(text: str) -> dict:
    """Check every block of a log. Unlike the analyser, keeps going after a bad block."""
    errors = []
    records = []
    for i, (start, chunk) in enumerate(split_blocks(text), start=1):
        try:
            records.append(parse_record(chunk, block=i, line=start))
        except InputFormatError as e:
            errors.append(e.to_dict())

    if errors:
        return _verdict(errors, records=len(records))

    table = generate_corruptability(records)
    undefined = [{"delay": d, "location": loc} for d, loc in table.undefined_cells()]
    return _verdict(
        errors,
        records=len(records),
        truncated_records=sum(1 for r in records if r.truncated),
        undefined_cells=undefined,
    )

def check_log(log_path: Path) -> dict:
    try:
        text = Path(log_path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        return _verdict([{"code": "E_ENCODING", "message": ERRORS["E_ENCODING"], "detail": str(e)}], records=0)
    except OSError as e:
        return _verdict([{"code": "E_READ", "message": ERRORS["E_READ"], "detail": str(e)}], records=0)
    return check_text(text)
