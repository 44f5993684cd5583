import datetime

import pytest

import frubuild
from frubuild.utils import UTC

NOW = datetime.datetime(1996, 1, 2, 0, 0, tzinfo=UTC)

class ListLogger(frubuild.Logger):
    """ Keeps messages for inspection. """
    def __init__(self):
        self.infos    = []
        self.warnings = []

    def info(self, msg):
        self.infos.append(msg)

    def warning(self, msg):
        self.warnings.append(msg)

@pytest.fixture
def logger():
    return ListLogger()

@pytest.fixture
def encoder(logger):
    return frubuild.Encoder(logger, now=NOW)

@pytest.fixture
def full_cfg():
    return {
        "iua": {},
        "cia": {
            "chassis_type": 0x17,
            "part_number": "CH-1000",
            "serial_number": "SN0001",
        },
        "bia": {
            "language_code": 0,
            "mfg_datetime": 0,
            "manufacturer": "Acme",
            "product_name": "Widget",
        },
        "pia": {
            "manufacturer": "Acme",
            "product_name": "Widget Server",
        },
        "mia_mar": {
            "sub_type": 7,
            "record_data": "4c4c4544-0039-3010-8053-b2c04f585331",
        },
        "mia_ver": {
            "oem_vpd_major_version": 1,
            "oem_vpd_minor_version": 3,
        },
        "mia_mac": {
            "host_mac_address_count": 2,
            "host_base_mac_address": "0011223344AA",
            "bmc_mac_address_count": 1,
            "bmc_base_mac_address": "0011223344BB",
            "switch_mac_address_count": 0x130,
            "switch_base_mac_address": "0011223344CC",
        },
        "mia_fan": {
            "max_fan_speed": 12000,
            "fan_airflow": 1,
        },
        "mia_bci": {
            "vendor_id": "GenuineIntel",
            "family": "Xeon",
            "controller_type": "BMC",
        },
        "mia_sc": {
            "format_version": 0x82,
            "customer_id": 0x12345678,
        },
    }
