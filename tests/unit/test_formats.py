"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import json

import pytest

from aws_ec2_query import ConfigurationError, ResponseParseError, ReturnFormat
from aws_ec2_query.exceptions import UnknownFormatError
from aws_ec2_query.formats import convert_response, xml_to_structure

DESCRIBE_REGIONS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<DescribeRegionsResponse xmlns="http://ec2.amazonaws.com/doc/2012-07-20/">
   <requestId>59dbff89-35bd-4eac-99ed-be587EXAMPLE</requestId>
   <regionInfo>
      <item>
         <regionName>us-east-1</regionName>
         <regionEndpoint>ec2.us-east-1.amazonaws.com</regionEndpoint>
      </item>
      <item>
         <regionName>eu-west-1</regionName>
         <regionEndpoint>ec2.eu-west-1.amazonaws.com</regionEndpoint>
      </item>
   </regionInfo>
</DescribeRegionsResponse>
"""

DESCRIBE_REGIONS_STRUCTURE = {
    "xmlns": "http://ec2.amazonaws.com/doc/2012-07-20/",
    "requestId": "59dbff89-35bd-4eac-99ed-be587EXAMPLE",
    "regionInfo": {
        "item": [
            {
                "regionName": "us-east-1",
                "regionEndpoint": "ec2.us-east-1.amazonaws.com",
            },
            {
                "regionName": "eu-west-1",
                "regionEndpoint": "ec2.eu-west-1.amazonaws.com",
            },
        ]
    },
}


class TestReturnFormat:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("xml", ReturnFormat.XML),
            ("XML", ReturnFormat.XML),
            ("json", ReturnFormat.JSON),
            ("Json", ReturnFormat.JSON),
            ("raw", ReturnFormat.RAW),
            ("RAW", ReturnFormat.RAW),
            ("structured", ReturnFormat.STRUCTURED),
            ("perl", ReturnFormat.STRUCTURED),
            ("PERL", ReturnFormat.STRUCTURED),
            (ReturnFormat.JSON, ReturnFormat.JSON),
        ],
    )
    def test_parse(self, name, expected: ReturnFormat):
        assert ReturnFormat.parse(name) is expected

    @pytest.mark.parametrize("name", ["yaml", "", "jsonx", None, 1])
    def test_parse_invalid(self, name):
        with pytest.raises(ConfigurationError, match="unknown return type"):
            ReturnFormat.parse(name)


class TestXmlToStructure:
    def test_describe_regions(self):
        assert xml_to_structure(DESCRIBE_REGIONS_XML) == DESCRIBE_REGIONS_STRUCTURE

    def test_accepts_bytes(self):
        body = DESCRIBE_REGIONS_XML.encode("utf-8")
        assert xml_to_structure(body) == DESCRIBE_REGIONS_STRUCTURE

    def test_attributes_and_content(self):
        structure = xml_to_structure(
            '<root><tag name="a">text</tag><empty/><other id="1"/></root>'
        )
        assert structure == {
            "tag": {"name": "a", "content": "text"},
            "empty": {},
            "other": {"id": "1"},
        }

    def test_repeated_siblings_become_list(self):
        structure = xml_to_structure("<root><a>1</a><a>2</a><a>3</a><b>4</b></root>")
        assert structure == {"a": ["1", "2", "3"], "b": "4"}

    def test_text_only_root(self):
        assert xml_to_structure("<root>value</root>") == "value"

    def test_malformed_body(self):
        with pytest.raises(ResponseParseError):
            xml_to_structure("<root><unclosed></root>")


class TestConvertResponse:
    def test_raw_and_xml_return_body_unchanged(self):
        for return_format in (ReturnFormat.RAW, ReturnFormat.XML):
            assert (
                convert_response(body=DESCRIBE_REGIONS_XML, return_format=return_format)
                is DESCRIBE_REGIONS_XML
            )

    def test_structured(self):
        assert (
            convert_response(
                body=DESCRIBE_REGIONS_XML, return_format=ReturnFormat.STRUCTURED
            )
            == DESCRIBE_REGIONS_STRUCTURE
        )

    def test_json(self):
        result = convert_response(
            body=DESCRIBE_REGIONS_XML, return_format=ReturnFormat.JSON
        )
        assert isinstance(result, str)
        assert json.loads(result) == DESCRIBE_REGIONS_STRUCTURE
        assert ": " not in result and ", " not in result

    def test_json_keeps_non_ascii_text(self):
        result = convert_response(
            body="<root><name>café</name></root>", return_format=ReturnFormat.JSON
        )
        assert result == '{"name":"café"}'

    def test_unknown_format(self):
        with pytest.raises(UnknownFormatError):
            convert_response(body=DESCRIBE_REGIONS_XML, return_format="yaml")
