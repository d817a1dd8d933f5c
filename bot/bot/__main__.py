#    Copyright 2025, Stankevich Andrey, stankevich.as@phystech.edu

#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at

#        http://www.apache.org/licenses/LICENSE-2.0

#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.

"""Command line entry point: python -m bot [--token TOKEN]."""

import argparse
import os


def main(argv: list[str] | None = None):  # noqa

    parser = argparse.ArgumentParser(
        description="Telegram bot for face search on searchface.ru"
    )
    parser.add_argument(
        "--token", type=str, default=None,
        help="Telegram bot token, overrides BOT_TOKEN"
    )
    args = parser.parse_args(argv)

    # settings are read on import, so the override goes first
    if args.token:
        os.environ["BOT_TOKEN"] = args.token

    from .main import run
    run()


if __name__ == "__main__":
    main()
