"""
geet CLI entrypoint: commands that build an Earth Engine computation with the
library helpers, print the resulting band names and optionally write an
interactive HTML map.
"""

import sys
from functools import wraps

import click  # type: ignore
from click import echo
import ee
from ee import EEException

from geet.analytics.calibration import (
    SolarAngle,
    brightness_temp,
    toa_radiance,
    toa_reflectance,
    toa_reflectance_l8,
)
from geet.analytics.change import CHANGE_INDICES, detect_change
from geet.analytics.classification import (
    PARAMS_BY_KIND,
    ClassifierKind,
    KMeansParams,
    RandomForestParams,
    classify as run_classifier,
    kmeans as run_kmeans,
)
from geet.core.config import ConfigManager
from geet.core.errors import GeetError
from geet.core.logger import Logger
from geet.geo.aoi import load_training_data, to_ee_geometry
from geet.ingestion.eemanager import ee_manager
from geet.ingestion.indices import NdwiConvention, index_names, spectral_indices
from geet.ingestion.loader import CollectionKind, DEFAULT_ROI, load_image
from geet.ingestion.sensorspec import Sensor
from geet.visualization.map_surface import (
    MapSurface,
    plot_change,
    plot_class,
    plot_clusters,
    plot_ndvi,
)

logger = Logger.get_logger(__name__)

SENSOR_CHOICE = click.Choice([s.value for s in Sensor], case_sensitive=False)
INDEX_SENSOR_CHOICE = click.Choice(["L5", "L8"], case_sensitive=False)


def _handle_errors(func):
    """Report library and Earth Engine errors on stderr and exit with status 1."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (GeetError, EEException) as e:
            logger.error("%s failed: %s", func.__name__, e)
            echo(f"❌  {e}", err=True)
            sys.exit(1)

    return wrapper


def _report(image: ee.Image) -> None:
    """Echo the band names of *image* fetched from Earth Engine."""
    bands = ee_manager.safe_get_info(image.bandNames())
    echo(f"✅  Bands: {', '.join(bands)}")


def _new_surface(ctx) -> MapSurface:
    return MapSurface(config=ctx.obj["config"])


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="YAML/TOML/JSON file overriding default parameters",
)
@click.pass_context
def cli(ctx, config_path):
    """geet: Earth Engine helpers for Landsat imagery."""
    Logger.setup()
    ctx.ensure_object(dict)
    ctx.obj["config"] = ConfigManager(config_path)


@cli.command()
@click.argument("image_id")
@click.option("--sensor", "-s", type=INDEX_SENSOR_CHOICE, required=True)
@click.option(
    "--index",
    "-i",
    "indices",
    multiple=True,
    type=click.Choice(index_names(), case_sensitive=False),
    help="Index to compute (repeatable); all indices when omitted",
)
@click.option(
    "--ndwi-convention",
    type=click.Choice([c.value for c in NdwiConvention]),
    default=None,
    help="Band pair used for NDWI",
)
@click.option("--map", "map_path", type=click.Path(), default=None)
@click.pass_context
@_handle_errors
def indices(ctx, image_id, sensor, indices, ndwi_convention, map_path):
    """Append spectral index bands to the image IMAGE_ID."""
    ee_manager.initialize()
    result = spectral_indices(
        ee.Image(image_id), sensor, list(indices) or None, ndwi_convention
    )
    _report(result)
    if map_path:
        surface = _new_surface(ctx)
        if not indices or "NDVI" in [i.upper() for i in indices]:
            plot_ndvi(surface, result.select("NDVI"), "NDVI")
        surface.save(map_path)


@cli.command()
@click.argument("image1")
@click.argument("image2")
@click.option("--sensor", "-s", type=INDEX_SENSOR_CHOICE, required=True)
@click.option(
    "--index",
    "-i",
    type=click.Choice([i.value for i in CHANGE_INDICES], case_sensitive=False),
    default="NDVI",
)
@click.option("--threshold", "-t", type=float, required=True)
@click.option("--map", "map_path", type=click.Path(), default=None)
@click.pass_context
@_handle_errors
def change(ctx, image1, image2, sensor, index, threshold, map_path):
    """Threshold change detection between IMAGE1 and IMAGE2."""
    ee_manager.initialize()
    result = detect_change(ee.Image(image1), ee.Image(image2), sensor, index, threshold)
    _report(result)
    if map_path:
        surface = _new_surface(ctx)
        plot_change(surface, result, f"{index.lower()}_cd")
        surface.save(map_path)


@cli.command()
@click.argument("image_id")
@click.argument("training")
@click.option("--field", "-f", "field_name", required=True, help="Class property")
@click.option(
    "--method",
    "-m",
    type=click.Choice([k.value for k in ClassifierKind]),
    default=ClassifierKind.RF.value,
)
@click.option("--trees", type=int, default=None, help="Random forest tree count")
@click.option("--classes", type=click.IntRange(2, 5), default=None)
@click.option("--map", "map_path", type=click.Path(), default=None)
@click.pass_context
@_handle_errors
def classify(ctx, image_id, training, field_name, method, trees, classes, map_path):
    """
    Supervised classification of IMAGE_ID. TRAINING is an Earth Engine
    FeatureCollection id or a local vector file with labeled samples.
    """
    kind = ClassifierKind(method)
    params = PARAMS_BY_KIND[kind].from_config(ctx.obj["config"])
    if trees is not None:
        if kind is not ClassifierKind.RF:
            raise click.BadParameter("--trees only applies to --method rf")
        params = RandomForestParams(num_trees=trees, scale=params.scale)
    if map_path and classes is None:
        raise click.BadParameter("--classes is required with --map")

    ee_manager.initialize()
    samples = load_training_data(training, field_name)
    result = run_classifier(kind, ee.Image(image_id), samples, field_name, params)
    _report(result)
    if map_path:
        surface = _new_surface(ctx)
        plot_class(surface, result, classes)
        surface.save(map_path)


@cli.command()
@click.argument("image_id")
@click.argument("region")
@click.option("--clusters", type=int, default=None)
@click.option("--scale", type=int, default=None)
@click.option("--pixels", type=int, default=None)
@click.option("--map", "map_path", type=click.Path(), default=None)
@click.pass_context
@_handle_errors
def kmeans(ctx, image_id, region, clusters, scale, pixels, map_path):
    """
    Unsupervised k-means clustering of IMAGE_ID, sampling inside REGION
    (a vector file or "lon,lat").
    """
    defaults = KMeansParams.from_config(ctx.obj["config"])
    params = KMeansParams(
        num_clusters=clusters if clusters is not None else defaults.num_clusters,
        scale=scale if scale is not None else defaults.scale,
        num_pixels=pixels if pixels is not None else defaults.num_pixels,
    )
    ee_manager.initialize()
    result = run_kmeans(ee.Image(image_id), to_ee_geometry(region), params)
    _report(result)
    if map_path:
        surface = _new_surface(ctx)
        plot_clusters(surface, result)
        surface.save(map_path)


@cli.command()
@click.argument("image_id")
@click.option("--band", "-b", required=True, help="Band number, e.g. 4 or B4")
@click.option(
    "--mode",
    type=click.Choice(["radiance", "reflectance", "reflectance-l8"]),
    default="radiance",
)
@click.option(
    "--solar-angle",
    default=SolarAngle.SZ.value,
    help="Solar angle correction for reflectance-l8: SE or SZ",
)
@_handle_errors
def calibrate(image_id, band, mode, solar_angle):
    """Convert a band of IMAGE_ID from DN to TOA radiance or reflectance."""
    ee_manager.initialize()
    image = ee.Image(image_id)
    if mode == "radiance":
        result = toa_radiance(image, band)
    elif mode == "reflectance":
        result = toa_reflectance(image, band)
    else:
        result = toa_reflectance_l8(image, band, solar_angle)
    _report(result)


@cli.command(name="brightness-temp")
@click.argument("image_id")
@click.option("--sensor", "-s", type=SENSOR_CHOICE, required=True)
@click.option("--single", is_flag=True, help="Landsat 8: process B10 only")
@_handle_errors
def brightness_temp_cmd(image_id, sensor, single):
    """TOA brightness temperature (K) of the thermal band of IMAGE_ID."""
    ee_manager.initialize()
    _report(brightness_temp(ee.Image(image_id), sensor, single=single))


@cli.command()
@click.option("--year", "-y", type=int, default=None, help="Acquisition year")
@click.option(
    "--collection",
    "-c",
    type=click.Choice([c.value for c in CollectionKind], case_sensitive=False),
    default=CollectionKind.TOA.value,
)
@click.option("--lon", type=float, default=DEFAULT_ROI[0])
@click.option("--lat", type=float, default=DEFAULT_ROI[1])
@click.option("--map", "map_path", type=click.Path(), default=None)
@click.pass_context
@_handle_errors
def load(ctx, year, collection, lon, lat, map_path):
    """Find the least cloudy Landsat scene of a year over a point."""
    ee_manager.initialize()
    loaded = load_image(year, collection, roi=(lon, lat))
    scene_id = ee_manager.safe_get_info(loaded.image.id())
    echo(f"✅  {loaded.title}: {scene_id} ({loaded.collection_id})")
    if map_path:
        surface = _new_surface(ctx)
        surface.add_layer(loaded.image, loaded.vis_params, loaded.title)
        surface.save(map_path)


if __name__ == "__main__":
    cli()  # pylint: disable=no-value-for-parameter
