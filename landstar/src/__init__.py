"""
LandStar charge-controller reader package.

Reads an EPEver/EPSolar LandStar LS-B solar charge controller over Modbus
RTU and decodes its rated data, real-time data, status bitfields, settings
and statistics into typed records.

CHANGELOG:
- 2026-10-17: Initial creation

TODO:
- None
"""
