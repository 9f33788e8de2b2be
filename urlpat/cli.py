# urlpat/cli.py
from __future__ import annotations

import argparse
import sys
from typing import Iterable, Tuple

from .fetcher import PSL_URL, Fetcher, save_suffix_list
from .logger import RunLogger
from .pattern import PatternError, compile_pattern
from .pipeline import Pipeline
from .progress import Progress
from .suffixes import SNAPSHOT_SOURCE, SuffixListError, load_suffix_table

DEDUP_KEYWORD = "dedup"
DEFAULT_PATTERN = "%c"

PATTERN_HELP = """\
%s scheme | %c url-like with scheme (https is default) | %a authority
%u username | %x password | %d domain | %S subdomain | %r apex | root
%n name (example.tld -> example) | %t tld | suffix | %P port | %p path
%q query | %k query keys | %v query values | %f fragment
%/ '://' if scheme | %@ '@' if userinfo | %: ':' if port
%? '?' if query | %# '#' if fragment | %% literal '%'
add the word 'dedup' to drop repeated output lines"""


def split_dedup_keyword(pattern: str) -> Tuple[str, bool]:
    """'dedup %d' / '%d dedup' / 'dedup' -> (pattern without the word, True)."""
    words = pattern.split(" ")
    if DEDUP_KEYWORD not in (words[0], words[-1]):
        return pattern, False
    if words[0] == DEDUP_KEYWORD:
        words = words[1:]
    if words and words[-1] == DEDUP_KEYWORD:
        words = words[:-1]
    return " ".join(words), True


def _input_lines(args: Iterable[str]) -> Iterable[str]:
    args = list(args)
    if args:
        return args
    return sys.stdin


def main(argv=None):
    p = argparse.ArgumentParser(
        "urlpat",
        description="Extract URL components with a pattern.",
        epilog=PATTERN_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("pattern", help="Pattern string or a keyword such as domain, apex, tld")
    p.add_argument("args", nargs="*", help="Inputs; stdin is read when none are given")
    p.add_argument("-u", "--dedup", action="store_true", help="Drop repeated output lines")
    p.add_argument("--suffix-list", default="", help="Public suffix list file (default: bundled snapshot)")
    p.add_argument("--refresh-suffix-list", action="store_true",
                   help="Download the public suffix list into --suffix-list before running")
    p.add_argument("--suffix-list-url", default=PSL_URL)
    p.add_argument("--timeout", type=int, default=15)
    p.add_argument("--retries", type=int, default=3)
    p.add_argument("--private", action="store_true", help="Also use private-domain suffix rules")
    p.add_argument("--default-ports", action="store_true", help="Use the scheme's well-known port when none is given")
    p.add_argument("--keep-empty", action="store_true", help="Print a blank line for inputs with empty output")
    p.add_argument("--log-file", default="")
    p.add_argument("--mirror-log", action="store_true", help="Mirror log events to stderr")
    p.add_argument("--progress", action="store_true")

    args = p.parse_args(argv)

    pattern, dedup = split_dedup_keyword(args.pattern)
    pattern = pattern or DEFAULT_PATTERN
    try:
        compile_pattern(pattern)
    except PatternError as e:
        p.error(str(e))
    if args.refresh_suffix_list and not args.suffix_list:
        p.error("--refresh-suffix-list requires --suffix-list FILE")

    runlog = RunLogger(args.log_file or None, mirror_stderr=args.mirror_log)
    try:
        if args.refresh_suffix_list:
            fetch = Fetcher(timeout=args.timeout, retries=args.retries)
            fr = fetch.get(args.suffix_list_url)
            if not fr.ok:
                runlog.log("WARN", "SUFFIX_FETCH_FAIL", url=fr.url, status=fr.status, error=fr.error or "")
                sys.stderr.write(f"urlpat: cannot download {fr.url}: {fr.error}\n")
                return 1
            try:
                save_suffix_list(fr, args.suffix_list)
            except SuffixListError as e:
                runlog.log("WARN", "SUFFIX_SAVE_FAIL", path=args.suffix_list, error=e)
                sys.stderr.write(f"urlpat: {e}\n")
                return 1
            runlog.log("INFO", "SUFFIX_FETCH", url=fr.url, bytes=fr.bytes_read, path=args.suffix_list)

        try:
            table = load_suffix_table(args.suffix_list or None, include_private=args.private)
        except SuffixListError as e:
            sys.stderr.write(f"urlpat: {e}\n")
            return 1
        runlog.log("INFO", "SUFFIX_LOAD", source=args.suffix_list or SNAPSHOT_SOURCE,
                   rules=len(table), private=args.private)

        progress = Progress(enabled=args.progress)
        pipe = Pipeline(pattern, table, dedup=dedup or args.dedup, keep_empty=args.keep_empty,
                        default_ports=args.default_ports, runlog=runlog, progress=progress)
        out = sys.stdout
        for line in pipe.run(_input_lines(args.args)):
            out.write(line + "\n")
        out.flush()
        progress.done()
    finally:
        runlog.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
