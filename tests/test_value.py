"""Tests for decoding raw SNMP values."""

import pytest
from pysnmp.proto.rfc1902 import Counter64, Integer32, IpAddress, OctetString

from netprobe.core.errors import DecodeError
from netprobe.network.value import SNMPResponse, SNMPValue, UINT64_MAX


OID = "1.3.6.1.2.1.2.2.1.5.1"


def test_plain_integers():
    assert SNMPValue(OID, 42).uint64() == 42
    assert SNMPValue(OID, -42).int64() == -42
    assert SNMPValue(OID, " 17 ").uint64() == 17
    assert SNMPValue(OID, b"17").int64() == 17


def test_asn1_integers():
    assert SNMPValue(OID, Counter64(UINT64_MAX)).uint64() == UINT64_MAX
    assert SNMPValue(OID, Integer32(-5)).int64() == -5
    assert SNMPValue(OID, Integer32(7)).float64() == 7.0


def test_negative_value_is_not_unsigned():
    with pytest.raises(DecodeError):
        SNMPValue(OID, Integer32(-5)).uint64()


def test_out_of_range():
    with pytest.raises(DecodeError):
        SNMPValue(OID, UINT64_MAX + 1).uint64()
    with pytest.raises(DecodeError):
        SNMPValue(OID, 2 ** 63).int64()


def test_text_requested_as_integer_names_oid_and_type():
    with pytest.raises(DecodeError) as exc:
        SNMPValue(OID, "eth0").uint64()
    assert exc.value.oid == OID
    assert exc.value.requested_type == "uint64"
    assert OID in str(exc.value)


def test_bool_and_none_are_not_numbers():
    with pytest.raises(DecodeError):
        SNMPValue(OID, True).uint64()
    with pytest.raises(DecodeError):
        SNMPValue(OID, None).float64()
    with pytest.raises(DecodeError):
        SNMPValue(OID, None).string()


def test_fractional_value_is_not_an_integer():
    with pytest.raises(DecodeError):
        SNMPValue(OID, 1.5).int64()
    assert SNMPValue(OID, 2.0).int64() == 2


def test_floats():
    assert SNMPValue(OID, "12.5").float64() == 12.5
    assert SNMPValue(OID, OctetString("-3.25")).float64() == -3.25
    with pytest.raises(DecodeError):
        SNMPValue(OID, "n/a").float64()


def test_strings():
    assert SNMPValue(OID, OctetString("GigabitEthernet0/1")).string() == "GigabitEthernet0/1"
    assert SNMPValue(OID, 100).string() == "100"
    assert SNMPValue(OID, IpAddress("192.0.2.1")).string() == "192.0.2.1"


def test_binary_octets_are_hex_formatted():
    raw = OctetString(hexValue="001a2b3c4d5e")
    assert SNMPValue(OID, raw).string() == "00:1a:2b:3c:4d:5e"


def test_decode_by_type_name():
    value = SNMPValue(OID, "10")
    assert value.decode("uint") == 10
    assert value.decode("int") == 10
    assert value.decode("float") == 10.0
    assert value.decode("string") == "10"
    with pytest.raises(DecodeError):
        value.decode("timestamp")


def test_response_index():
    response = SNMPResponse("1.3.6.1.2.1.2.2.1.1.10", 10)
    assert response.index("1.3.6.1.2.1.2.2.1.1") == "10"
    assert response.index("1.3.6.1.2.1.2.2.1.1.10") == ""
    assert SNMPResponse(".1.3.6.1.4.1.9.1.2.3", 1).index("1.3.6.1.4.1.9") == "1.2.3"
    assert response.get_value().uint64() == 10
