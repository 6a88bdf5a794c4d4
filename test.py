import copy
import json
import uuid
from concurrent.futures import ThreadPoolExecutor

valid_receipts = {
    json.dumps({
        "retailer": "Target",
        "purchaseDate": "2022-01-01",
        "purchaseTime": "13:01",
        "items": [
            {
                "shortDescription": "Mountain Dew 12PK",
                "price": "6.49"
            }, {
                "shortDescription": "Emils Cheese Pizza",
                "price": "12.25"
            }, {
                "shortDescription": "Knorr Creamy Chicken",
                "price": "1.26"
            }, {
                "shortDescription": "Doritos Nacho Cheese",
                "price": "3.35"
            }, {
                "shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ",
                "price": "12.00"
            }
        ],
        "total": "35.35"
    }): 28,
    json.dumps({
        "retailer": "M&M Corner Market",
        "purchaseDate": "2022-03-20",
        "purchaseTime": "14:33",
        "items": [
            {
                "shortDescription": "Gatorade",
                "price": "2.25"
            }, {
                "shortDescription": "Gatorade",
                "price": "2.25"
            }, {
                "shortDescription": "Gatorade",
                "price": "2.25"
            }, {
                "shortDescription": "Gatorade",
                "price": "2.25"
            }
        ],
        "total": "9.00"
    }): 109,
    json.dumps({
        "retailer": "Walgreens",
        "purchaseDate": "2022-01-02",
        "purchaseTime": "08:13",
        "total": "2.65",
        "items": [
            {"shortDescription": "Pepsi - 12-oz", "price": "1.25"},
            {"shortDescription": "Dasani", "price": "1.40"}
        ]
    }): 15,
    json.dumps({
        "retailer": "Target",
        "purchaseDate": "2022-01-02",
        "purchaseTime": "13:13",
        "total": "1.25",
        "items": [
            {"shortDescription": "Pepsi - 12-oz", "price": "1.25"}
        ]
    }): 31
}

required_receipt_attributes = ["retailer", "total", "items", "purchaseDate", "purchaseTime"]


def post_receipt(client, receipt):
    return client.post('/receipts/process', content_type='application/json', data=json.dumps(receipt))


def test_process_valid_receipts(client):
    for test_json, expected_points in valid_receipts.items():
        expected = {"points": expected_points}
        process_response = client.post('/receipts/process', content_type='application/json', data=test_json)
        assert process_response.status_code == 200
        receipt_id = json.loads(process_response.data)["id"]
        uuid.UUID(receipt_id)
        get_response = client.get(f'/receipts/{receipt_id}/points')
        assert get_response.status_code == 200
        assert expected == json.loads(get_response.data)


def test_process_receipts_unique_ids(client, simple_receipt_skeleton):
    receipt_ids = []
    for i in range(10):
        process_response = post_receipt(client, simple_receipt_skeleton)
        receipt_ids.append(json.loads(process_response.data)["id"])
    assert len(set(receipt_ids)) == len(receipt_ids)


def test_process_receipts_invalid_retailer_name(client, simple_receipt_skeleton):
    invalid_names = ["   ", "", "\t\n"]
    expected = {"error": "Error: receipt retailer cannot be empty"}
    for name in invalid_names:
        simple_receipt_skeleton["retailer"] = name
        process_response = post_receipt(client, simple_receipt_skeleton)
        assert process_response.status_code == 400
        assert json.loads(process_response.data) == expected


def test_process_receipts_invalid_purchase_date(client, simple_receipt_skeleton):
    invalid_dates = ["test", "0000-01-01", "2023-15-15", "2023-10-99", "dummydummydummy", "", '9999-99-99',
                     "2024-13-01", "2023-02-29", "02/30/2024", "13/13/2023", "Feb 30, 2024"]
    for date in invalid_dates:
        expected = {"error": f"Error: invalid receipt purchase date ({date})"}
        simple_receipt_skeleton["purchaseDate"] = date
        process_response = post_receipt(client, simple_receipt_skeleton)
        assert process_response.status_code == 400
        assert json.loads(process_response.data) == expected


def test_process_receipts_invalid_purchase_time(client, simple_receipt_skeleton):
    invalid_times = ["test", "13:99", "99:13", "99:99", "dummydummydummy", "", '13-13', "25:00", "13:00 PM"]
    for time in invalid_times:
        expected = {"error": f"Error: invalid receipt purchase time ({time})"}
        simple_receipt_skeleton["purchaseTime"] = time
        process_response = post_receipt(client, simple_receipt_skeleton)
        assert process_response.status_code == 400
        assert json.loads(process_response.data) == expected


def test_process_receipts_invalid_attribute_formats_except_items(client, simple_receipt_skeleton):
    invalid_elements = [None, [], 25, 3.88, {}]
    for attribute in required_receipt_attributes:
        if attribute != "items":
            original = simple_receipt_skeleton[attribute]
            expected = {"error": f"Error: invalid {attribute} format"}
            for elem in invalid_elements:
                simple_receipt_skeleton[attribute] = elem
                process_response = post_receipt(client, simple_receipt_skeleton)
                assert process_response.status_code == 400
                assert json.loads(process_response.data) == expected
            simple_receipt_skeleton[attribute] = original


def test_process_receipts_missing_attributes(client, simple_receipt_skeleton):
    for attribute in required_receipt_attributes:
        receipt = copy.deepcopy(simple_receipt_skeleton)
        del receipt[attribute]
        process_response = post_receipt(client, receipt)
        assert process_response.status_code == 400
        assert json.loads(process_response.data) == {"error": f"Error: missing {attribute} in receipt"}


def test_process_receipts_unrecognized_fields(client, simple_receipt_skeleton):
    for field in ["extra", "id", "points"]:
        receipt = copy.deepcopy(simple_receipt_skeleton)
        receipt[field] = "x"
        process_response = post_receipt(client, receipt)
        assert process_response.status_code == 400
        assert json.loads(process_response.data) == {"error": f"Error: unrecognized receipt field ({field})"}

    simple_receipt_skeleton["items"][0]["quantity"] = "2"
    process_response = post_receipt(client, simple_receipt_skeleton)
    assert process_response.status_code == 400
    assert json.loads(process_response.data) == {"error": "Error: unrecognized item field (quantity)"}


def test_process_receipts_invalid_json_body(client):
    for body in ["not json", "[]", "\"Target\"", "null"]:
        process_response = client.post('/receipts/process', content_type='application/json', data=body)
        assert process_response.status_code == 400
        assert json.loads(process_response.data) == {"error": "Error: invalid receipt json"}


def test_process_receipts_invalid_items_format(client, simple_receipt_skeleton):
    invalid_elements = [None, 25, 3.88, {}, ""]
    expected = {"error": "Error: invalid receipt items list format"}
    for elem in invalid_elements:
        simple_receipt_skeleton["items"] = elem
        process_response = post_receipt(client, simple_receipt_skeleton)
        assert process_response.status_code == 400
        assert json.loads(process_response.data) == expected


def test_process_receipts_invalid_items_list_length(client, simple_receipt_skeleton):
    expected = {"error": "Error: receipt items list is empty"}
    simple_receipt_skeleton["items"] = []
    process_response = post_receipt(client, simple_receipt_skeleton)
    assert process_response.status_code == 400
    assert json.loads(process_response.data) == expected


def test_process_receipts_invalid_item_formats(client, simple_receipt_skeleton):
    expected = {"error": "Error: invalid receipt item format"}
    for elem in [None, 25, 3.88, [], ""]:
        receipt = copy.deepcopy(simple_receipt_skeleton)
        receipt["items"][0] = elem
        process_response = post_receipt(client, receipt)
        assert process_response.status_code == 400
        assert json.loads(process_response.data) == expected
    for attribute in ["shortDescription", "price"]:
        for elem in [None, 25, 3.88, [], {}]:
            receipt = copy.deepcopy(simple_receipt_skeleton)
            receipt["items"][0][attribute] = elem
            process_response = post_receipt(client, receipt)
            assert process_response.status_code == 400
            assert json.loads(process_response.data) == expected


def test_process_receipts_invalid_item_descriptions(client, simple_receipt_skeleton):
    expected = {"error": "Error: item description cannot be empty"}
    for description in ["", "    "]:
        simple_receipt_skeleton["items"][0]["shortDescription"] = description
        process_response = post_receipt(client, simple_receipt_skeleton)
        assert process_response.status_code == 400
        assert json.loads(process_response.data) == expected


def test_process_receipts_invalid_item_price(client, simple_receipt_skeleton):
    expected_errors = {
        "": "Error: item price cannot be empty",
        "test": "Error: invalid item price (test)",
        "1.2.3": "Error: invalid item price (1.2.3)",
        "NaN": "Error: invalid item price (NaN)",
        "0": "Error: item price must be greater than zero (0)",
        "0.00": "Error: item price must be greater than zero (0.00)",
        "-1.25": "Error: item price must be greater than zero (-1.25)",
    }
    for price, message in expected_errors.items():
        simple_receipt_skeleton["items"][0]["price"] = price
        process_response = post_receipt(client, simple_receipt_skeleton)
        assert process_response.status_code == 400
        assert json.loads(process_response.data) == {"error": message}


def test_process_receipts_invalid_total(client, simple_receipt_skeleton):
    for total in ["test", "", "1.25.0"]:
        expected = {"error": f"Error: invalid receipt total ({total})"}
        simple_receipt_skeleton["total"] = total
        process_response = post_receipt(client, simple_receipt_skeleton)
        assert process_response.status_code == 400
        assert json.loads(process_response.data) == expected


def test_process_receipts_total_mismatch(client, simple_receipt_skeleton):
    for total in ["1.24", "1.26", "0", "1.255"]:
        expected = {"error": f"Error: receipt total ({total}) does not match sum of item prices (1.25)"}
        simple_receipt_skeleton["total"] = total
        process_response = post_receipt(client, simple_receipt_skeleton)
        assert process_response.status_code == 400
        assert json.loads(process_response.data) == expected


def test_rejected_receipt_is_not_stored(client, simple_receipt_skeleton, store):
    simple_receipt_skeleton["total"] = "99.99"
    post_receipt(client, simple_receipt_skeleton)
    assert len(store) == 0
    assert json.loads(client.get('/receipts/').data) == []


def test_get_receipt_returns_normalized_receipt(client):
    receipt = {
        "retailer": "Target",
        "purchaseDate": "01/01/2022",
        "purchaseTime": "1:01 pm",
        "items": [
            {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
            {"shortDescription": "Emils  Cheese   Pizza", "price": "12.25"},
            {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
            {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
            {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"}
        ],
        "total": "35.35"
    }
    receipt_id = json.loads(post_receipt(client, receipt).data)["id"]

    get_response = client.get(f'/receipts/{receipt_id}')
    assert get_response.status_code == 200
    stored = json.loads(get_response.data)
    assert stored["id"] == receipt_id
    assert stored["purchaseDate"] == "2022-01-01"
    assert stored["purchaseTime"] == "13:01"
    assert stored["points"] == 28
    assert [item["shortDescription"] for item in stored["items"]] == [
        "Mountain Dew 12PK", "Emils Cheese Pizza", "Knorr Creamy Chicken",
        "Doritos Nacho Cheese", "Klarbrunn 12-PK 12 FL OZ",
    ]
    assert stored["total"] == "35.35"


def test_get_receipt_nonexistent_id(client):
    res = client.get('/receipts/test')
    assert res.status_code == 404
    assert json.loads(res.data) == {'error': 'Error: receipt id not found (test)'}


def test_get_points_nonexistent_id(client):
    res = client.get('/receipts/test/points')
    assert res.status_code == 404
    expected = {'error': 'Error: receipt id not found (test)'}
    assert json.loads(res.data) == expected


def test_list_receipts(client, simple_receipt_skeleton):
    assert json.loads(client.get('/receipts/').data) == []
    first = json.loads(post_receipt(client, simple_receipt_skeleton).data)["id"]
    second = json.loads(post_receipt(client, simple_receipt_skeleton).data)["id"]

    res = client.get('/receipts/')
    assert res.status_code == 200
    listed = json.loads(res.data)
    assert {receipt["id"] for receipt in listed} == {first, second}
    assert all(receipt["points"] == 31 for receipt in listed)


def test_unknown_endpoint(client):
    res = client.get('/nothing/here')
    assert res.status_code == 404
    assert json.loads(res.data) == {
        "error": "Endpoint not found",
        "message": "The requested URL /nothing/here was not found on this server.",
    }


def test_wrong_method(client):
    res = client.get('/receipts/process/points')
    assert res.status_code == 404
    res = client.post('/receipts/abc/points')
    assert res.status_code == 405
    assert json.loads(res.data)["error"] == "Method not allowed"


def test_get_points_idempotency(client, simple_receipt_skeleton):
    process_response = post_receipt(client, simple_receipt_skeleton)
    receipt_id = json.loads(process_response.data)["id"]
    for i in range(5):
        get_response = client.get(f'/receipts/{receipt_id}/points')
        assert get_response.status_code == 200
        assert json.loads(get_response.data)["points"] == 31


def test_process_receipts_concurrency(client, simple_receipt_skeleton, store):
    params = [simple_receipt_skeleton] * 300

    def test_post(json_param):
        return client.post('/receipts/process', content_type='application/json', json=json_param)

    with ThreadPoolExecutor(max_workers=50) as pool:
        responses = list(pool.map(test_post, params))

    assert all(response.status_code == 200 for response in responses)
    receipt_ids = {json.loads(response.data)["id"] for response in responses}
    assert len(receipt_ids) == 300
    assert len(store) == 300


def test_process_distinct_receipts_concurrently(client):
    payloads = list(valid_receipts.keys())

    def test_post(payload):
        return client.post('/receipts/process', content_type='application/json', data=payload)

    with ThreadPoolExecutor(max_workers=len(payloads)) as pool:
        responses = list(pool.map(test_post, payloads))

    receipt_ids = [json.loads(response.data)["id"] for response in responses]
    assert len(set(receipt_ids)) == len(payloads)
    listed = json.loads(client.get('/receipts/').data)
    assert {receipt["id"] for receipt in listed} == set(receipt_ids)
    assert sorted(receipt["points"] for receipt in listed) == sorted(valid_receipts.values())


def test_get_points_concurrency(client, simple_receipt_skeleton):
    process_response = post_receipt(client, simple_receipt_skeleton)
    receipt_id = json.loads(process_response.data)["id"]
    params = [receipt_id] * 300

    def test_get(id_param):
        return client.get(f'/receipts/{id_param}/points')

    with ThreadPoolExecutor(max_workers=50) as pool:
        responses = list(pool.map(test_get, params))

    assert all(json.loads(response.data) == {"points": 31} for response in responses)


def test_process_receipts_oversized_amounts(client, simple_receipt_skeleton, store):
    huge = "1" * 30 + ".00"
    simple_receipt_skeleton["items"][0]["price"] = huge
    simple_receipt_skeleton["total"] = huge
    process_response = post_receipt(client, simple_receipt_skeleton)
    assert process_response.status_code == 400
    assert json.loads(process_response.data) == {"error": f"Error: invalid item price ({huge})"}
    assert len(store) == 0


def test_process_receipts_non_ascii_digits(client, simple_receipt_skeleton):
    simple_receipt_skeleton["purchaseDate"] = "٢٠٢٢-٠١-٠٢"
    process_response = post_receipt(client, simple_receipt_skeleton)
    assert process_response.status_code == 400
    assert json.loads(process_response.data) == {"error": "Error: invalid receipt purchase date (٢٠٢٢-٠١-٠٢)"}
