import argparse
import sys

from . import get_version
from .config.loader import load_config
from .errors import RagContextError
from .rag.assembler import ContextAssembler
from .retrieval.vector_store import InMemoryVectorStore, load_seed
from .telemetry import Metrics
from .utils.logging import set_level


def _parse_meta(pairs):
    meta = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"expected key=value, got {pair!r}")
        meta[key] = value
    return meta


def main(argv=None):
    parser = argparse.ArgumentParser(prog="rag-context")
    parser.add_argument("--version", action="store_true", help="Print package version and exit")
    parser.add_argument("--log-level", default=None, help="Logging level (default from RAG_CONTEXT_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("version", help="Print package version")

    build_p = sub.add_parser("build", help="Build and print the encoded context for a query")
    build_p.add_argument("query", help="Query text")
    build_p.add_argument("--meta", action="append", default=[], metavar="KEY=VALUE", help="Extra payload field")
    build_p.add_argument("--config", default=None, help="YAML file merged over the defaults")
    build_p.add_argument("--profile", default=None, help="Configuration profile name")
    build_p.add_argument("--seed", default=None, help="JSONL documents loaded into an in-memory store")

    args = parser.parse_args(argv)
    if args.log_level:
        set_level(args.log_level)

    if args.version or args.cmd == "version":
        print(get_version())
        return 0
    if args.cmd == "build":
        try:
            meta = _parse_meta(args.meta)
        except argparse.ArgumentTypeError as exc:
            parser.error(str(exc))
        cfg = load_config("rag", overrides_path=args.config, profile=args.profile)
        try:
            store = InMemoryVectorStore(load_seed(args.seed)) if args.seed else None
            assembler = ContextAssembler(cfg, vector_store=store, metrics=Metrics(cfg))
            print(assembler.build_context(args.query, meta))
        except RagContextError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
