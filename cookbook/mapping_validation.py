from curlmapper.core import EngineConfig, MappingError, PayloadBuilder, validate_mappings


def main():
    mappings = [
        {"jsonPath": "customer", "csvHeader": "Customer"},
        {"jsonPath": "customer.email", "csvHeader": "Email"},
        {"jsonPath": "items[]", "dataType": "array_string", "csvHeader": "Items"},
        {"jsonPath": "items[].qty", "dataType": "array_number", "csvHeader": "Qty"},
    ]

    ok, errors = validate_mappings(mappings)
    print(f"valid: {ok}")
    for error in errors:
        print(f"  {error}")

    # Without validation the later mapping wins.
    print(PayloadBuilder(mappings).build({"Customer": "Ada", "Email": "ada@example.com", "Items": "a,b", "Qty": "1"}))

    try:
        PayloadBuilder(mappings, config=EngineConfig(strict_schema=True))
    except MappingError as e:
        print(e)


if __name__ == "__main__":
    main()
