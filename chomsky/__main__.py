#!/usr/bin/env python3
"""Command-line front end for chomsky project files.

Run:
  python -m chomsky new project.json --last Ivanov --first Ivan --patronymic Ivanovich \
      --group IU7-11 --terminals а --non-terminals A --rule S=аA --rule A=а --rule A=ъ
  python -m chomsky show project.json
  python -m chomsky derive project.json 1 3 --write
"""

import argparse
import sys
from typing import Optional

from .errors import ChomskyError
from .session import Application, FileStorage
from .snapshot import UserData
from .symbols import formatResult


def _parseRule(text: str) -> tuple[str, str]:
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"rule must look like LEFT=RIGHT, got {text!r}")
    left, right = text.split("=", 1)
    return left, right


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="chomsky",
        description="Author grammars and derive words step by step.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    pn = sub.add_parser("new", help="Write a new project file.")
    pn.add_argument("project", help="Path of the project file to write.")
    pn.add_argument("--last", required=True)
    pn.add_argument("--first", required=True)
    pn.add_argument("--patronymic", required=True)
    pn.add_argument("--group", required=True)
    pn.add_argument("--terminals", default="", help="Terminal letters, e.g. 'аб'.")
    pn.add_argument("--non-terminals", default="", help="Non-terminals besides S, e.g. 'AB'.")
    pn.add_argument("--rule", action="append", type=_parseRule, default=[],
                    help="Production rule LEFT=RIGHT; use ъ for the empty word. Repeatable.")

    ps = sub.add_parser("show", help="Print the grammar.")
    ps.add_argument("project", help="Path of the project file.")

    pd = sub.add_parser("derive", help="Apply rules by shortcut key and print the derivation.")
    pd.add_argument("project", help="Path of the project file.")
    pd.add_argument("keys", nargs="*", help="Shortcut keys (1-9, A-Z) or 'undo'.")
    pd.add_argument("--reset", action="store_true", help="Start a new derivation first.")
    pd.add_argument("--write", action="store_true", help="Save the updated derivation back.")
    return p


def _load(path) -> Application:
    app = Application(UserData(lastName="-", firstName="-", patronymic="-", group="-"),
                      FileStorage(path))
    if not app.loadProject():
        raise ChomskyError(app.notification.message if app.notification else "could not load project")
    return app


def _printDerivation(app: Application):
    for i, step in enumerate(app.engine.steps):
        applied = f"  [{step.ruleIndex}]" if step.ruleIndex is not None else ""
        print(f"{i+1:3}. {formatResult(step.result)}{applied}")
    if app.engine.completed():
        print("completed")
    else:
        print("rules:")
        for choice in app.engine.choices():
            print(f"  {choice!r}")
    if len(app.store):
        print("saved:")
        for entry in app.store:
            print(f"  {formatResult(entry.finalWord)}: {entry!r}")


def cmd_new(args) -> None:
    user = UserData(lastName=args.last, firstName=args.first,
                    patronymic=args.patronymic, group=args.group)
    app = Application(user, FileStorage(args.project))
    edits = [ (app.addTerminal, t) for t in args.terminals ] + \
            [ (app.addNonTerminal, n) for n in args.non_terminals if n != "S" ]
    for edit, sym in edits:
        if not edit(sym): raise ChomskyError(app.notification.message)
    for left, right in args.rule:
        if not app.addRule(left, right): raise ChomskyError(app.notification.message)
    if args.rule and not app.saveGrammar():
        raise ChomskyError(app.notification.message)
    if not app.saveProject():
        raise OSError(app.notification.message)


def cmd_show(args) -> None:
    app = _load(args.project)
    if app.grammar is None:
        print("no grammar defined")
        return
    print(app.grammar)


def cmd_derive(args) -> None:
    app = _load(args.project)
    if app.grammar is None:
        raise ChomskyError("no grammar defined")
    if args.reset:
        app.newDerivation()
    for key in args.keys:
        if key == "undo": app.undo()
        else:             app.pressKey(key)
    _printDerivation(app)
    if args.write and not app.saveProject():
        raise OSError(app.notification.message)


def main(argv: Optional[list[str]] = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    try:
        if args.cmd == "new":
            cmd_new(args)
        elif args.cmd == "show":
            cmd_show(args)
        elif args.cmd == "derive":
            cmd_derive(args)
        else:
            raise AssertionError("unreachable")
    except ChomskyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
