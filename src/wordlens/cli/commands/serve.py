"""Serve command: run the HTTP API."""


def add_subparser(subparsers):
    parser = subparsers.add_parser("serve", help="Run the HTTP API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.set_defaults(func=run_serve)


def run_serve(args):
    import uvicorn

    uvicorn.run("wordlens.server.main:app", host=args.host, port=args.port)
