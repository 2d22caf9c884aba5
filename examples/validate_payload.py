"""Example script validating decoded order payloads."""
from config import ConfigPresets, configure_logging, get_config_manager
from spex import BooleanSpec, DecimalSpec, IntegerSpec, ListSpec, MapSpec, StringSpec, new, validate


def build_order_spec():
    """Build the spec for an order payload."""
    line_item = MapSpec(
        required={
            'sku': StringSpec(regex=r'^[A-Z]{3}-\d{4}$'),
            'quantity': IntegerSpec(gte=1, lte=100),
            'unit_price': DecimalSpec(gt=0, max_decimal_places=2),
        },
        optional={'gift_wrap': BooleanSpec()},
        exclusive=True
    )

    return MapSpec(
        required={
            'order_id': IntegerSpec(gt=0),
            'currency': StringSpec(one_of_ci=['USD', 'EUR', 'GBP']),
            'items': ListSpec(of=line_item, min_len=1, max_len=50),
        },
        optional={
            'note': StringSpec(nullable=True),
            'tags': new('list', of=new('string'), max_len=5),
        },
        exclusive=True,
        also=lambda order: len({item['sku'] for item in order['items']}) == len(order['items'])
        or "items must have distinct skus"
    )


def run_examples():
    """Validate a few payloads and print the results."""
    spec = build_order_spec()

    payloads = {
        'valid order': {
            'order_id': 17,
            'currency': 'usd',
            'items': [{'sku': 'ABC-0001', 'quantity': 2, 'unit_price': '9.99'}],
            'note': None,
        },
        'bad line items': {
            'order_id': 18,
            'currency': 'EUR',
            'items': [
                {'sku': 'abc', 'quantity': 0, 'unit_price': '9.999'},
                {'sku': 'XYZ-0002', 'unit_price': '1', 'coupon': 'FREE'},
            ],
        },
        'duplicate skus': {
            'order_id': 19,
            'currency': 'GBP',
            'items': [
                {'sku': 'ABC-0001', 'quantity': 1, 'unit_price': '1.00'},
                {'sku': 'ABC-0001', 'quantity': 1, 'unit_price': '1.00'},
            ],
        },
        'not an order': ['order_id', 20],
    }

    for name, payload in payloads.items():
        errors = validate(payload, spec)
        print(f"{name}:")
        if errors is None:
            print("  ok")
        elif isinstance(errors, str):
            print(f"  {errors}")
        else:
            for path, message in errors.items():
                print(f"  {'.'.join(str(part) for part in path)}: {message}")


if __name__ == "__main__":
    get_config_manager().load_from_dict(ConfigPresets.development())
    configure_logging()

    print("=" * 60)
    print("Validating order payloads")
    print("=" * 60)
    run_examples()
