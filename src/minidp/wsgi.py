import argparse
import os
import sys

from werkzeug.serving import run_simple

from minidp.idp_server import make_app
from minidp.idp_config import IdPConfig

config_file = os.environ.get("MINIDP_CONFIG")
idp_config = IdPConfig(config_file)
app = make_app(idp_config)


def main():
    global app

    parser = argparse.ArgumentParser(description="Run the minidp SSO endpoint.")
    parser.add_argument("port", type=int, nargs="?", default=idp_config["PORT"])
    parser.add_argument("--keyfile", type=str)
    parser.add_argument("--certfile", type=str)
    parser.add_argument("--host", type=str)
    args = parser.parse_args()

    if (args.keyfile and not args.certfile) or (args.certfile and not args.keyfile):
        print("Both keyfile and certfile must be specified for HTTPS.")
        sys.exit(1)

    ssl_context = (
        (args.certfile, args.keyfile)
        if args.keyfile and args.certfile
        else None
    )
    host = args.host or idp_config["HOST"]
    run_simple(host, args.port, app, ssl_context=ssl_context)


if __name__ == "__main__":
    main()
