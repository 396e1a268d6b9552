import pytest

from fng.hierarchy import parse_hierarchy, parse_list_data

HIERARCHY_CSV = """Client,Client Abbr,Brand,Brand Abbr,Project,Project Abbr
Acme,ACM,Nova,NV,Launch,LNC
Acme,ACME-OTHER,Nova,NOVA-OTHER,Relaunch,RLN
Acme,,Orbit,,N/A,
"# comment row",,,,,
Globex,GBX,Nova,GNV,Summer,SUM
Globex,GBX,Nova,GNV,n/a,NA
"""

MEDIUM_CSV = """Name,Abbr
Digital,DIG
Print,
"""

MATERIAL_CSV = """Name,Abbr
PNG,PNG
"Vinyl, matte",VNM
"""


@pytest.fixture
def hierarchy():
    return parse_hierarchy(HIERARCHY_CSV)


@pytest.fixture
def mediums():
    return parse_list_data(MEDIUM_CSV)


@pytest.fixture
def materials():
    return parse_list_data(MATERIAL_CSV)
