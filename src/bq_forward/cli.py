import argparse
import json
import os
import re
from typing import Any, Dict

import yaml
from fastapi import Request

from bq_forward.router import route, OUTPUT_STATEMENTS


class CLIRequest(Request):
    """
    Minimal Request wrapper for CLI execution.
    Provides headers for identity extraction.
    """

    def __init__(self, user_id: str = "cli_user"):
        scope = {
            "type": "http",
            "headers": [],
        }
        super().__init__(scope)
        self._user_id = user_id

    @property
    def headers(self):
        return {"x-user-id": self._user_id}


class C:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"


def cprint(text: str, color: str = C.RESET, bold: bool = False):
    prefix = (C.BOLD if bold else "") + color
    print(f"{prefix}{text}{C.RESET}")


def load_model(path: str) -> Dict[str, Any]:
    """
    Load a model document. YAML is a superset of JSON, so both are accepted.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Model file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _safe_filename(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_.-]", "_", name or "unnamed")


def _table_filename(table_name: str, used: set) -> str:
    """
    table_<name>.sql, suffixed with _2, _3, ... on repeated names.
    """
    base = f"table_{_safe_filename(table_name)}"
    filename = f"{base}.sql"
    counter = 2
    while filename in used:
        filename = f"{base}_{counter}.sql"
        counter += 1
    used.add(filename)
    return filename


def _write_text(path: str, content: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def persist_artifacts(response: Dict[str, Any], output_dir: str) -> None:
    os.makedirs(output_dir, exist_ok=True)

    ddl = response.get("ddl", {})
    if ddl.get("database_ddl"):
        _write_text(os.path.join(output_dir, "create_schema.sql"), ddl["database_ddl"] + ";\n")

    used = set()
    for table_name, statement in zip(response.get("tables", []), ddl.get("table_ddls", [])):
        filename = _table_filename(table_name, used)
        _write_text(os.path.join(output_dir, filename), statement + ";\n")

    _write_text(os.path.join(output_dir, "script.sql"), response.get("script", "") + "\n")

    summary = {
        "status": response.get("status"),
        "request_id": response.get("request_id"),
        "dataset": response.get("dataset"),
        "tables": response.get("tables"),
        "issues": response.get("issues"),
    }
    with open(os.path.join(output_dir, "run_summary.json"), "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2)


def main(argv=None):
    parser = argparse.ArgumentParser(description="BigQuery Forward Engineering CLI")

    parser.add_argument("--model", required=True, help="Path to JSON or YAML model document")
    parser.add_argument("--strict", action="store_true", help="Fail on model validation errors")
    parser.add_argument("--output-dir", default="artifacts")
    parser.add_argument("--print", dest="print_script", action="store_true", help="Print the script to stdout")
    parser.add_argument("--user-id", default="cli_user")

    args = parser.parse_args(argv)

    try:
        model = load_model(args.model)
        payload = {
            "model": model,
            "strict": args.strict,
            "output": OUTPUT_STATEMENTS,
            "user_id": args.user_id,
        }

        cprint("\n[START] DDL generation started", C.BLUE, bold=True)
        response = route(payload, CLIRequest(user_id=args.user_id))

        for issue in response.get("issues", []):
            color = C.RED if issue["severity"] == "ERROR" else C.YELLOW
            cprint(f"[{issue['severity']}] {issue['path']}: {issue['message']}", color)

        persist_artifacts(response, args.output_dir)

        if args.print_script:
            print(response["script"])

        cprint(f"\n[DONE] Artifacts written to: {args.output_dir}", C.GREEN, bold=True)

    except Exception as e:
        cprint("\n[FAILED] DDL generation failed.", C.RED, bold=True)
        cprint(str(e), C.RED)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
