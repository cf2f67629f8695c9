from curlmapper.core import PayloadBuilder, EngineConfig


def main():
    mappings = [
        {
            "jsonPath": "shipment.legs",
            "dataType": "array_object",
            "csvHeader": "Legs",
            "transformation": {"enabled": True, "separator": ",", "itemSeparator": "*"},
            "internalFields": [
                {"key": "origin.code", "index": 0, "dataType": "string"},
                {"key": "destination.code", "index": 1, "dataType": "string"},
                {"key": "days", "index": 2, "dataType": "number"},
            ],
        },
        {
            "jsonPath": "shipment.codes",
            "dataType": "array_string",
            "csvHeader": "Legs",
            "transformation": {"enabled": True, "separator": ",", "itemSeparator": "*", "itemIndex": 1},
        },
    ]

    row = {"Legs": "(HAN*SGN*2), (SGN*BKK*3), (BKK*HAN)"}

    builder = PayloadBuilder(mappings, config=EngineConfig())
    result = builder.trace(row)

    print(result["payload"])
    for field in result["fields"]:
        print(field["json_path"], field["branch"], field["value"])


if __name__ == "__main__":
    main()
