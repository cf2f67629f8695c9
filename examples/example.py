from curlmapper.core import MappingBuilder, parse_delimited_text

pasted = (
    "SKU\tName\tQty\tTags\tRoute\n"
    "A1\tOak plank\t2\tnew | sale\t(HAN*SGN), (HAN*AAA)\n"
    "B2\tPine plank\tx\t\t(BKK*HAN)\n"
)

table = parse_delimited_text(pasted)

builder = (
    MappingBuilder()
    .column("product.sku", "SKU")
    .column("product.name", "Name")
    .column("quantity", "Qty", data_type="number")
    .field("tags").column("Tags").as_type("array_string").split("|").end()
    .field("legs").column("Route").items(",", "*")
        .internal("from", 0).internal("to", 1).end()
    .const("channel", "bulk-import")
    .to_payload_builder()
)

for row in table.rows:
    print(builder.build(row))

print(builder.preview(table.rows).to_string(index=False))
