"""
Shared test fixtures for the XML to JSON converter test suite.
"""

import pytest

from xml_json_converter.cache import ConversionCache
from xml_json_converter.xmltree import parse_xml


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class CountingParser:
    """Wraps parse_xml and counts how often it is called."""

    def __init__(self):
        self.calls = 0

    def __call__(self, text):
        self.calls += 1
        return parse_xml(text)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def counting_parser():
    return CountingParser()


@pytest.fixture
def cache(clock):
    return ConversionCache(ttl_seconds=300, clock=clock)


@pytest.fixture
def sample_workflow_xml():
    """A two-tool workflow in the layout written by Alteryx Designer."""
    return """<?xml version="1.0"?>
<AlteryxDocument yxmdVer="2024.1">
  <Nodes>
    <Node ToolID="1">
      <GuiSettings Plugin="AlteryxBasePluginsGui.DbFileInput.DbFileInput">
        <Position x="54" y="126"/>
      </GuiSettings>
      <Properties>
        <Configuration>
          <File>customers.csv</File>
        </Configuration>
        <Annotation DisplayMode="0">
          <Name>Load Customers</Name>
        </Annotation>
      </Properties>
      <EngineSettings EngineDll="AlteryxBasePluginsEngine.dll" EngineDllEntryPoint="AlteryxDbFileInput"/>
    </Node>
    <Node ToolID="2">
      <GuiSettings Plugin="AlteryxBasePluginsGui.Filter.Filter">
        <Position x="150" y="126"/>
      </GuiSettings>
      <Properties>
        <Configuration>
          <Expression>[Status] = "Active"</Expression>
        </Configuration>
        <Annotation DisplayMode="0"/>
      </Properties>
      <EngineSettings EngineDll="AlteryxBasePluginsEngine.dll" EngineDllEntryPoint="AlteryxFilter"/>
    </Node>
  </Nodes>
  <Connections>
    <Connection>
      <Origin ToolID="1" Connection="Output"/>
      <Destination ToolID="2" Connection="Input"/>
    </Connection>
  </Connections>
  <Properties>
    <Memory default="True"/>
    <DefaultTempFilePath/>
    <MetaInfo>
      <NameIsFileName value="True"/>
      <Name>Customer Filter</Name>
      <Description>Keeps active customers</Description>
      <Author>Data Team</Author>
      <CategoryName>Demo</CategoryName>
    </MetaInfo>
  </Properties>
</AlteryxDocument>"""
