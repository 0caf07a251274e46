from __future__ import annotations
import argparse
import json
import logging
import sys

from .config import Config
from .engine import GematriaBuilder, GematriaContext
from .methods import GematriaMethod

def _read_text(text):
    if text is not None:
        return text
    return sys.stdin.read()

def build_context(args: argparse.Namespace) -> GematriaContext:
    return (
        GematriaBuilder()
        .with_method(args.method)
        .with_cache(args.enable_cache)
        .with_vowels(args.preserve_vowels)
        .init_gematria()
    )

def cmd_calculate(args: argparse.Namespace) -> int:
    result = args.ctx.calculate(args.text)
    if args.json:
        print(json.dumps(
            {"text": args.text, "word": result.word, "method": result.method.value, "value": result.value},
            ensure_ascii=False, indent=2,
        ))
    elif args.verbose:
        print(f"Gematria value for '{args.text}': {result.value}")
    else:
        print(result.value)
    return 0

def cmd_search_match(args: argparse.Namespace) -> int:
    words = args.ctx.search_matching_words(args.word, _read_text(args.text))
    if args.json:
        print(json.dumps(words, ensure_ascii=False, indent=2))
        return 0

    for w in words:
        print(w)
    return 0

def cmd_group_words(args: argparse.Namespace) -> int:
    groups = args.ctx.group_words_by_gematria(_read_text(args.text))
    if args.json:
        print(json.dumps([{"value": v, "words": ws} for v, ws in groups], ensure_ascii=False, indent=2))
        return 0

    for value, words in groups:
        if args.verbose:
            print(f"Gematria value {value:4}: {', '.join(words)}")
        else:
            print(f"{value:4} -> {', '.join(words)}")
    return 0

def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn
    uvicorn.run(
        "gemcalc.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )
    return 0

def build_parser(config: Config | None = None) -> argparse.ArgumentParser:
    config = config or Config()
    methods = [m.value for m in GematriaMethod.implemented()]

    p = argparse.ArgumentParser(prog="gemcalc", description="Hebrew gematria calculator")
    p.add_argument("-m", "--method", default=config.METHOD, choices=methods, help="Gematria calculation method")
    p.add_argument("-c", "--enable-cache", action="store_true", dest="enable_cache",
                   help="Enable caching for repeated calculations")
    p.add_argument("-p", "--preserve-vowels", action=argparse.BooleanOptionalAction, dest="preserve_vowels",
                   default=config.PRESERVE_VOWELS, help="Preserve vowels in the words")
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_calc = sub.add_parser("calculate", help="Calculate the gematria value of a word or phrase")
    p_calc.add_argument("text", help="Word or phrase")
    p_calc.add_argument("--json", action="store_true", help="Output JSON")
    p_calc.set_defaults(func=cmd_calculate)

    p_s = sub.add_parser("search-match", help="Find words with the same value as WORD")
    p_s.add_argument("word", help="Word to compare against")
    p_s.add_argument("text", nargs="?", default=None, help="Text to search (default: stdin)")
    p_s.add_argument("--json", action="store_true", help="Output JSON")
    p_s.set_defaults(func=cmd_search_match)

    p_g = sub.add_parser("group-words", help="Group words with matching gematria values")
    p_g.add_argument("text", nargs="?", default=None, help="Text to group (default: stdin)")
    p_g.add_argument("--json", action="store_true", help="Output JSON")
    p_g.set_defaults(func=cmd_group_words)

    p_srv = sub.add_parser("serve", help="Run FastAPI server")
    p_srv.add_argument("--host", default=config.HOST)
    p_srv.add_argument("--port", type=int, default=config.PORT)
    p_srv.add_argument("--reload", action="store_true")
    p_srv.set_defaults(func=cmd_serve)

    return p

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[gemcalc] %(levelname)s %(name)s: %(message)s",
    )
    if args.func is not cmd_serve:
        try:
            args.ctx = build_context(args)
        except ValueError as e:
            # unknown or unimplemented method coming from GEMCALC_METHOD
            parser.error(str(e))
    return args.func(args)

if __name__ == "__main__":
    raise SystemExit(main())
