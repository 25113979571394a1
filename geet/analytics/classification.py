"""
Module `analytics.classification` wraps Earth Engine supervised classifiers
(SVM, CART, Random Forest) and k-means clustering behind one call shape:
sample the image, train the model, apply it to the whole image.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

import ee

from geet.core.config import ConfigManager
from geet.core.errors import (
    MissingParameterError,
    ParameterTypeError,
    UnsupportedClassifierError,
)
from geet.core.logger import Logger

logger = Logger.get_logger(__name__)


@dataclass(frozen=True)
class SvmParams:
    """Support vector machine settings."""

    kernel_type: str = ConfigManager.DEFAULT_SVM_KERNEL
    cost: float = ConfigManager.DEFAULT_SVM_COST
    scale: int = ConfigManager.DEFAULT_SAMPLE_SCALE

    @classmethod
    def from_config(cls, cfg: ConfigManager) -> "SvmParams":
        return cls(
            kernel_type=cfg.get("svm_kernel", cls.kernel_type),
            cost=cfg.get("svm_cost", cls.cost),
            scale=cfg.get("sample_scale", cls.scale),
        )


@dataclass(frozen=True)
class CartParams:
    """Decision tree settings."""

    scale: int = ConfigManager.DEFAULT_SAMPLE_SCALE

    @classmethod
    def from_config(cls, cfg: ConfigManager) -> "CartParams":
        return cls(scale=cfg.get("sample_scale", cls.scale))


@dataclass(frozen=True)
class RandomForestParams:
    """Random forest settings."""

    num_trees: int = ConfigManager.DEFAULT_RF_TREES
    scale: int = ConfigManager.DEFAULT_SAMPLE_SCALE

    @classmethod
    def from_config(cls, cfg: ConfigManager) -> "RandomForestParams":
        return cls(
            num_trees=cfg.get("rf_trees", cls.num_trees),
            scale=cfg.get("sample_scale", cls.scale),
        )


@dataclass(frozen=True)
class KMeansParams:
    """k-means settings: clusters, sampling scale and number of sampled pixels."""

    num_clusters: int = ConfigManager.DEFAULT_KMEANS_CLUSTERS
    scale: int = ConfigManager.DEFAULT_KMEANS_SCALE
    num_pixels: int = ConfigManager.DEFAULT_KMEANS_PIXELS

    @classmethod
    def from_config(cls, cfg: ConfigManager) -> "KMeansParams":
        return cls(
            num_clusters=cfg.get("kmeans_clusters", cls.num_clusters),
            scale=cfg.get("kmeans_scale", cls.scale),
            num_pixels=cfg.get("kmeans_pixels", cls.num_pixels),
        )


class ClassifierKind(str, Enum):
    SVM = "svm"
    CART = "cart"
    RF = "rf"


PARAMS_BY_KIND = {
    ClassifierKind.SVM: SvmParams,
    ClassifierKind.CART: CartParams,
    ClassifierKind.RF: RandomForestParams,
}


def sample_training(
    image: ee.Image,
    training_data: ee.FeatureCollection,
    field_name: str,
    scale: int = ConfigManager.DEFAULT_SAMPLE_SCALE,
) -> ee.FeatureCollection:
    """Sample *image* at each training feature, keeping only *field_name*."""
    return image.sampleRegions(
        collection=training_data, properties=[field_name], scale=scale
    )


def svm(
    image: ee.Image,
    training_data: ee.FeatureCollection,
    field_name: str,
    params: Optional[SvmParams] = None,
) -> ee.Image:
    """Classify *image* with a support vector machine (RBF, cost 10 by default)."""
    params = params or SvmParams()
    logger.debug("Training SVM: %s", params)
    training = sample_training(image, training_data, field_name, params.scale)
    classifier = ee.Classifier.libsvm(kernelType=params.kernel_type, cost=params.cost)
    trained = classifier.train(training, field_name)
    return image.classify(trained)


def cart(
    image: ee.Image,
    training_data: ee.FeatureCollection,
    field_name: str,
    params: Optional[CartParams] = None,
) -> ee.Image:
    """Classify *image* with a CART decision tree."""
    params = params or CartParams()
    training = sample_training(image, training_data, field_name, params.scale)
    classifier = ee.Classifier.smileCart().train(training, field_name)
    return image.classify(classifier)


def random_forest(
    image: ee.Image,
    training_data: ee.FeatureCollection,
    field_name: str,
    params: Optional[RandomForestParams] = None,
) -> ee.Image:
    """Classify *image* with a random forest (10 trees by default)."""
    params = params or RandomForestParams()
    logger.debug("Training random forest with %d trees", params.num_trees)
    training = sample_training(image, training_data, field_name, params.scale)
    classifier = ee.Classifier.smileRandomForest(params.num_trees).train(
        training, field_name
    )
    return image.classify(classifier)


rf = random_forest


def classify(
    kind: Union[ClassifierKind, str],
    image: ee.Image,
    training_data: ee.FeatureCollection,
    field_name: str,
    params=None,
) -> ee.Image:
    """
    Dispatch to the supervised classifier named by *kind*. *params* must be
    the parameter class of that classifier (SvmParams, CartParams or
    RandomForestParams); None selects its defaults.
    """
    try:
        kind = ClassifierKind(kind.lower())
    except (AttributeError, ValueError) as err:
        raise UnsupportedClassifierError(
            kind, [k.value for k in ClassifierKind]
        ) from err
    params_cls = PARAMS_BY_KIND[kind]
    if params is None:
        params = params_cls()
    elif not isinstance(params, params_cls):
        raise ParameterTypeError("params", params_cls, params)
    if kind is ClassifierKind.SVM:
        return svm(image, training_data, field_name, params)
    if kind is ClassifierKind.CART:
        return cart(image, training_data, field_name, params)
    return random_forest(image, training_data, field_name, params)


def kmeans(
    image: ee.Image,
    region: Optional[ee.Geometry],
    params: Optional[KMeansParams] = None,
) -> ee.Image:
    """
    Cluster *image* with k-means trained on pixels sampled at random inside
    *region*. Defaults: 15 clusters, scale 30, 5000 pixels.
    """
    if region is None:
        raise MissingParameterError(
            "region", "k-means samples its training pixels inside a region"
        )
    params = params or KMeansParams()
    logger.debug("Training k-means: %s", params)
    training = image.sample(
        region=region, scale=params.scale, numPixels=params.num_pixels
    )
    clusterer = ee.Clusterer.wekaKMeans(params.num_clusters).train(training)
    return image.cluster(clusterer)
