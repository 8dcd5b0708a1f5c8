# Copyright (c) 2025 Krnel
# Points of Contact:
#   - kimmy@krnel.ai

import threading

import kvlog
from kvlog import Format, Options


def handle_request(log: kvlog.Logger, request_id: str):
    log = log.bind("request_id", request_id)
    log.debug("parsing request")
    log.info("request handled", status=200)


def main():
    root = kvlog.new_structlog(Options(
        name="example",
        environment="dev",
        region="local",
        level="info",
        format=Format.JSON,
        tags={"version": "0.1.0"},
    ))
    kvlog.set_singleton(root)

    kvlog.info("service starting", "port", 8080)

    threads = [threading.Thread(target=handle_request, args=(root, f"req-{i}")) for i in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    # Only the root changes level; the registered copy and derived loggers keep theirs.
    root.set_level("debug")
    handle_request(root, "req-debug")

    console = kvlog.new_stdlib(Options(name="console-example", format=Format.CONSOLE))
    console.warnf("%d requests served", 4)

    kvlog.infof("service stopping after %d requests", 4)
    console.close()
    kvlog.close()


if __name__ == "__main__":
    main()
