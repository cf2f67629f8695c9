import logging

from curlmapper.core import auto_map_headers, parse_delimited_text, seed_mappings, validate_mappings
from curlmapper.rest import BatchRunner, RequestDispatcher, RunnerConfig, parse_curl


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger = logging.getLogger("curlmapper.batch")

    api_config = parse_curl(
        "curl -X POST https://httpbin.org/post "
        "-H 'Authorization: Bearer <token>' "
        "-d '{\"sku\": \"A1\", \"qty\": 1, \"price\": 9.5, \"_note\": \"ignored\"}'"
    )

    table = parse_delimited_text("sku,qty,price\nA1,2,9.5\nB2,1,12\nC3,oops,3\n")

    mappings = auto_map_headers(seed_mappings(api_config), table.headers)
    ok, errors = validate_mappings(mappings)
    if not ok:
        for error in errors:
            print(f"Error: {error}")
        return

    with RequestDispatcher(api_config, mappings, logger=logger) as dispatcher:
        runner = BatchRunner(dispatcher, table.rows, RunnerConfig(delay_ms=500, logger=logger))
        stats = runner.run()
        print(f"Done: {stats.success} ok, {stats.error} failed")

        for log in runner.logs:
            if log.status != "success":
                print(f"Row #{log.id + 1}: {log.status_code} {log.response}")


if __name__ == "__main__":
    main()
