# pylint: disable=missing-module-docstring,missing-function-docstring,invalid-name,unused-argument,redefined-outer-name,eval-used
from types import SimpleNamespace

import numpy as np
import pytest
import ee


def _val(x):
    """Unwrap fakes into plain numbers/arrays."""
    if isinstance(x, FakeImage):
        return x.value()
    if isinstance(x, FakeNumber):
        return x.value
    return x


class FakeValue:
    """Stands in for a computed object that is only fetched with getInfo()."""

    def __init__(self, value):
        self._value = value

    def getInfo(self):
        return self._value


class FakeNumber:
    """ee.Number stub doing the arithmetic locally."""

    def __init__(self, value):
        self.value = _val(value)

    def multiply(self, other):
        return FakeNumber(self.value * _val(other))

    def subtract(self, other):
        return FakeNumber(self.value - _val(other))

    def add(self, other):
        return FakeNumber(self.value + _val(other))

    def divide(self, other):
        return FakeNumber(self.value / _val(other))

    def sin(self):
        return FakeNumber(np.sin(self.value))

    def cos(self):
        return FakeNumber(np.cos(self.value))


class FakeImage:
    """
    Numpy-backed ee.Image stand-in. Band algebra is evaluated locally, other
    calls are recorded in ``calls`` and return chainable fakes.
    """

    def __init__(self, bands=None, props=None, asset_id=None):
        self.bands = {k: np.asarray(v, dtype=float) for k, v in (bands or {}).items()}
        self.props = dict(props or {})
        self.asset_id = asset_id
        self.calls = []

    def _derive(self, bands):
        return FakeImage(bands, self.props, self.asset_id)

    def value(self, name=None):
        if name is not None:
            return self.bands[name]
        assert len(self.bands) == 1, f"expected one band, got {list(self.bands)}"
        return next(iter(self.bands.values()))

    # band algebra
    def select(self, *names):
        if len(names) == 1 and isinstance(names[0], (list, tuple)):
            names = names[0]
        return self._derive({n: self.bands[n] for n in names})

    def rename(self, *names):
        if len(names) == 1 and isinstance(names[0], (list, tuple)):
            names = names[0]
        return self._derive(dict(zip(names, self.bands.values())))

    def normalizedDifference(self, pair):
        a, b = (self.bands[n] for n in pair)
        return self._derive({"nd": (a - b) / (a + b)})

    def expression(self, expr, mapping):
        env = {k: _val(v) for k, v in mapping.items()}
        return self._derive({"constant": eval(expr, {"__builtins__": {}}, env)})

    def addBands(self, other):
        merged = dict(self.bands)
        merged.update(other.bands)
        return self._derive(merged)

    def gte(self, threshold):
        return self._derive(
            {k: (v >= threshold).astype(float) for k, v in self.bands.items()}
        )

    def add(self, other):
        name = next(iter(self.bands))
        return self._derive({name: self.value() + _val(other)})

    def divide(self, other):
        return self._derive({k: v / _val(other) for k, v in self.bands.items()})

    def log(self):
        return self._derive({k: np.log(v) for k, v in self.bands.items()})

    def get(self, key):
        return self.props[key]

    def bandNames(self):
        return FakeValue(list(self.bands))

    def id(self):
        return FakeValue(self.asset_id)

    # recorded server-side operations
    def reduceNeighborhood(self, **kwargs):
        self.calls.append(("reduceNeighborhood", kwargs))
        return self

    def sampleRegions(self, **kwargs):
        self.calls.append(("sampleRegions", kwargs))
        return SimpleNamespace(kind="samples", kwargs=kwargs)

    def sample(self, **kwargs):
        self.calls.append(("sample", kwargs))
        return SimpleNamespace(kind="pixels", kwargs=kwargs)

    def classify(self, classifier):
        self.calls.append(("classify", classifier))
        return self._derive({"classification": np.zeros(1)})

    def cluster(self, clusterer):
        self.calls.append(("cluster", clusterer))
        return self._derive({"cluster": np.zeros(1)})

    def randomVisualizer(self):
        self.calls.append(("randomVisualizer", None))
        return self._derive({"vis-red": np.zeros(1)})

    def getMapId(self, params):
        self.calls.append(("getMapId", params))
        return {
            "tile_fetcher": SimpleNamespace(
                url_format="https://earthengine.test/map/{z}/{x}/{y}"
            )
        }


class Recorder:
    """Collects calls made to stubbed Earth Engine algorithms."""

    def __init__(self):
        self.calls = []

    def record(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))

    def find(self, name):
        return [c for c in self.calls if c[0] == name]


class FakeModel:
    def __init__(self, recorder, name):
        self.recorder = recorder
        self.name = name

    def train(self, *args, **kwargs):
        self.recorder.record(f"{self.name}.train", *args, **kwargs)
        return self


class FakeGeometry:
    def __init__(self, geojson):
        self.geojson = geojson

    @staticmethod
    def Point(coords):
        return FakeGeometry({"type": "Point", "coordinates": list(coords)})


class FakeFeature:
    def __init__(self, geometry, props=None):
        self.geometry = geometry
        self.props = props or {}


class FakeFeatureCollection:
    def __init__(self, source):
        self.source = source


class FakeImageCollection:
    def __init__(self, collection_id, recorder, image):
        self.collection_id = collection_id
        self.recorder = recorder
        self.image = image

    def filterDate(self, start, end):
        self.recorder.record("filterDate", start, end)
        return self

    def filterBounds(self, region):
        self.recorder.record("filterBounds", region)
        return self

    def filter(self, flt):
        self.recorder.record("filter", flt)
        return self

    def sort(self, prop):
        self.recorder.record("sort", prop)
        return self

    def first(self):
        return self.image


@pytest.fixture(autouse=True)
def fake_ee(monkeypatch):
    """
    Stub the Earth Engine algorithms used by geet so no session is needed.

    Returns a namespace with ``recorder`` (algorithm calls), ``images`` (asset
    id -> FakeImage served by ee.Image) and ``collection_image`` (scene served
    by ImageCollection.first()).
    """
    recorder = Recorder()
    state = SimpleNamespace(
        recorder=recorder,
        images={},
        collection_image=FakeImage({"B4": [0.1]}, asset_id="LANDSAT/SCENE"),
    )

    def fake_image(arg=None):
        if isinstance(arg, FakeImage):
            return arg
        return state.images.get(arg) or FakeImage({"B1": [1.0]}, asset_id=arg)

    def model(name):
        def factory(*args, **kwargs):
            recorder.record(name, *args, **kwargs)
            return FakeModel(recorder, name)

        return staticmethod(factory)

    classifier_ns = type(
        "Classifier",
        (),
        {
            "libsvm": model("libsvm"),
            "smileCart": model("smileCart"),
            "smileRandomForest": model("smileRandomForest"),
        },
    )
    clusterer_ns = type("Clusterer", (), {"wekaKMeans": model("wekaKMeans")})
    reducer_ns = SimpleNamespace(stdDev=lambda: "stdDev", mode=lambda: "mode")
    kernel_ns = SimpleNamespace(circle=lambda radius: ("circle", radius))
    filter_ns = SimpleNamespace(
        calendarRange=lambda start, finish, field: ("calendarRange", start, finish, field)
    )

    monkeypatch.setattr(ee, "Initialize", lambda *args, **kwargs: None)
    monkeypatch.setattr(ee, "Authenticate", lambda *args, **kwargs: None)
    monkeypatch.setattr(ee, "Number", FakeNumber)
    monkeypatch.setattr(ee, "Image", fake_image)
    monkeypatch.setattr(ee, "Geometry", FakeGeometry)
    monkeypatch.setattr(ee, "Feature", FakeFeature, raising=False)
    monkeypatch.setattr(ee, "FeatureCollection", FakeFeatureCollection, raising=False)
    monkeypatch.setattr(
        ee,
        "ImageCollection",
        lambda cid: FakeImageCollection(cid, recorder, state.collection_image),
    )
    monkeypatch.setattr(ee, "Classifier", classifier_ns, raising=False)
    monkeypatch.setattr(ee, "Clusterer", clusterer_ns, raising=False)
    monkeypatch.setattr(ee, "Reducer", reducer_ns, raising=False)
    monkeypatch.setattr(ee, "Kernel", kernel_ns, raising=False)
    monkeypatch.setattr(ee, "Filter", filter_ns, raising=False)
    return state


@pytest.fixture
def l8_image():
    """Landsat 8 pixel values with a 2x2 footprint."""
    return FakeImage(
        {
            "B2": [[0.05, 0.05], [0.05, 0.05]],
            "B3": [[0.08, 0.08], [0.08, 0.08]],
            "B4": [[0.2, 0.2], [0.2, 0.2]],
            "B5": [[0.6, 0.6], [0.6, 0.6]],
            "B6": [[0.3, 0.3], [0.3, 0.3]],
        }
    )


@pytest.fixture
def l5_image():
    return FakeImage(
        {
            "B1": [0.04],
            "B2": [0.07],
            "B3": [0.1],
            "B4": [0.5],
            "B5": [0.25],
            "B6": [10.0],
        }
    )
