#!/usr/bin/env python3

from __future__ import annotations

import json
import unittest
from unittest import mock

from meal_plan_extractor.exceptions import ReplyParseError
from meal_plan_extractor.models.enrichment import ReplyShape
from meal_plan_extractor.parsers import (
    REPLY_PARSERS,
    parse_reply,
    repair_truncated_json,
    strip_code_fences,
)
from meal_plan_extractor.services.ingredient_formatter import coerce_lines, format_quantity


class ReplyShapeTests(unittest.TestCase):
    def test_structured_data_reply(self) -> None:
        reply = {
            "structuredData": {
                "ingredients": [
                    {"name": "flour", "quantity": 2.0, "unit": "cups"},
                    {"name": "eggs", "quantity": "3", "unit": None},
                    "1 tsp baking powder",
                ],
                "instructions": ["Whisk the batter.", "Fry in a hot pan."],
            }
        }
        fields = parse_reply(reply)
        self.assertEqual(fields.shape, ReplyShape.STRUCTURED_DATA)
        self.assertEqual(fields.ingredients,
                         ["2 cups flour", "3 eggs", "1 tsp baking powder"])
        self.assertEqual(fields.instructions, ["Whisk the batter.", "Fry in a hot pan."])

    def test_top_level_reply(self) -> None:
        fields = parse_reply({"instructions": ["Toast the bread."]})
        self.assertEqual(fields.shape, ReplyShape.TOP_LEVEL)
        self.assertEqual(fields.ingredients, [])
        self.assertEqual(fields.instructions, ["Toast the bread."])

    def test_structured_data_takes_precedence(self) -> None:
        reply = {
            "structuredData": {"ingredients": ["a"], "instructions": ["b"]},
            "ingredients": ["c"],
            "instructions": ["d"],
            "response": "{}",
        }
        fields = parse_reply(reply)
        self.assertEqual(fields.shape, ReplyShape.STRUCTURED_DATA)
        self.assertEqual(fields.instructions, ["b"])

    def test_structured_data_without_instructions_falls_through(self) -> None:
        reply = {
            "structuredData": {"ingredients": ["a"]},
            "ingredients": ["c"],
            "instructions": ["d"],
        }
        fields = parse_reply(reply)
        self.assertEqual(fields.shape, ReplyShape.TOP_LEVEL)
        self.assertEqual(fields.ingredients, ["c"])

    def test_unknown_shapes_are_rejected(self) -> None:
        with self.assertRaises(ReplyParseError):
            parse_reply({"message": "ok"})
        with self.assertRaises(ReplyParseError):
            parse_reply(["2 eggs"])
        with self.assertRaises(ReplyParseError):
            parse_reply({"instructions": "Whisk the eggs."})

    def test_unusable_quantities_are_dropped(self) -> None:
        reply = json.loads(
            '{"structuredData": {"ingredients": ['
            '{"name": "eggs", "quantity": Infinity}, '
            '{"name": "salt", "quantity": NaN}, '
            '{"name": "egg", "quantity": [2]}, '
            '{"name": "milk", "quantity": {"value": 1}}], '
            '"instructions": ["Whisk"]}}')
        fields = parse_reply(reply)
        self.assertEqual(fields.ingredients, ["eggs", "salt", "egg", "milk"])
        self.assertEqual(fields.instructions, ["Whisk"])

    def test_parser_errors_become_reply_parse_errors(self) -> None:
        reply = {"structuredData": {"ingredients": [], "instructions": ["Whisk"]}}
        with mock.patch.object(REPLY_PARSERS[0], "parse",
                               side_effect=OverflowError("cannot convert")):
            with self.assertRaises(ReplyParseError) as ctx:
                parse_reply(reply)
        self.assertIsInstance(ctx.exception.__cause__, OverflowError)


class IngredientFormatterTests(unittest.TestCase):
    def test_format_quantity(self) -> None:
        self.assertEqual(format_quantity(2.0), "2")
        self.assertEqual(format_quantity("0.50"), "0.5")
        self.assertEqual(format_quantity("1/2"), "1/2")
        self.assertEqual(format_quantity(float("inf")), "")
        self.assertEqual(format_quantity(float("-inf")), "")
        self.assertEqual(format_quantity(float("nan")), "")
        self.assertEqual(format_quantity("inf"), "")
        self.assertEqual(format_quantity([2]), "")
        self.assertEqual(format_quantity(True), "")

    def test_coerce_lines_skips_bad_quantities(self) -> None:
        self.assertEqual(coerce_lines([{"name": "egg", "quantity": [2]}]), ["egg"])
        self.assertEqual(
            coerce_lines([{"name": "flour", "quantity": 1e400, "unit": "cups"}]),
            ["cups flour"])


class ResponseTextTests(unittest.TestCase):
    def test_fenced_json(self) -> None:
        payload = {"ingredients": ["1 cup rice"], "instructions": ["Boil the rice."]}
        reply = {"response": "```json\n" + json.dumps(payload) + "\n```"}
        fields = parse_reply(reply)
        self.assertEqual(fields.shape, ReplyShape.RESPONSE_TEXT)
        self.assertEqual(fields.ingredients, ["1 cup rice"])
        self.assertEqual(fields.instructions, ["Boil the rice."])

    def test_json_surrounded_by_prose(self) -> None:
        reply = {"response": 'Here you go: {"ingredients": ["2 eggs"], '
                             '"instructions": ["Scramble the eggs."]} Enjoy!'}
        fields = parse_reply(reply)
        self.assertEqual(fields.ingredients, ["2 eggs"])
        self.assertEqual(fields.instructions, ["Scramble the eggs."])

    def test_truncated_reply_is_repaired(self) -> None:
        reply = {"response": '{"ingredients":["2 eggs"],"instructions":["Whisk e'}
        fields = parse_reply(reply)
        self.assertEqual(fields.shape, ReplyShape.REPAIRED_TEXT)
        self.assertEqual(fields.ingredients, ["2 eggs"])
        self.assertEqual(fields.instructions, ["Whisk e"])

    def test_long_truncated_reply_is_logged(self) -> None:
        reply = {"response": '{"ingredients":["' + "x" * 6100}
        with self.assertLogs("meal_plan_extractor.parsers.text_parser", level="WARNING"):
            fields = parse_reply(reply)
        self.assertEqual(fields.shape, ReplyShape.REPAIRED_TEXT)
        self.assertEqual(fields.instructions, [])

    def test_closed_but_invalid_json_is_not_repaired(self) -> None:
        with self.assertRaises(ReplyParseError):
            parse_reply({"response": '{"ingredients": [1,}'})

    def test_response_without_json(self) -> None:
        with self.assertRaises(ReplyParseError):
            parse_reply({"response": "Sorry, I cannot help with that."})

    def test_response_with_json_array(self) -> None:
        with self.assertRaises(ReplyParseError):
            parse_reply({"response": '["2 eggs"]'})


class RepairTests(unittest.TestCase):
    def test_closes_open_string_and_brackets(self) -> None:
        self.assertEqual(
            repair_truncated_json('{"ingredients":["2 eggs"],"instructions":["Whisk e'),
            '{"ingredients":["2 eggs"],"instructions":["Whisk e"]}')

    def test_drops_dangling_comma(self) -> None:
        repaired = repair_truncated_json('{"ingredients":["a",')
        self.assertEqual(repaired, '{"ingredients":["a"]}')
        self.assertEqual(json.loads(repaired), {"ingredients": ["a"]})

    def test_completes_dangling_key(self) -> None:
        repaired = repair_truncated_json('{"ingredients":["a"],"instructions":')
        self.assertEqual(json.loads(repaired), {"ingredients": ["a"], "instructions": None})

    def test_braces_inside_strings_are_ignored(self) -> None:
        repaired = repair_truncated_json('{"instructions":["Use a {large} pan')
        self.assertEqual(json.loads(repaired), {"instructions": ["Use a {large} pan"]})

    def test_strip_code_fences(self) -> None:
        self.assertEqual(strip_code_fences("```JSON\n{}\n```"), "{}")


if __name__ == "__main__":
    unittest.main()
