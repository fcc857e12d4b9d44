__name__ = "spindle"
__package__ = "spindle"
__title__ = "Spindle"
__version__ = "1.0.0"
__description__ = "Deserializer of OGC process execution requests into typed input and output definitions."
__source_repository__ = "https://github.com/crim-ca/spindle"
__documentation_url__ = "https://github.com/crim-ca/spindle#readme"
__license_type__ = "Apache License 2.0"
__license_classifier__ = "License :: OSI Approved :: Apache Software License"
__license_short__ = "2020, CRIM"
__license_long__ = f"{__title__} {__license_type__}, Copyright Ⓒ {__license_short__}"
__authors__ = [
    "CRIM",
]
__author__ = ", ".join(__authors__)
__emails__ = [
    ""
]
__keywords__ = [
    "wps",
    "ows",
    "ogc",
    "ogc-api-processes",
    "execute",
    "deserializer",
]
