"""
Serializable blur filter.

:class:`StackBlurFilter` bundles the blur parameters into a pydantic model so a
configured blur can be stored, sent around as JSON and applied later:

    >>> from stackblur.filter import StackBlurFilter, BlurFilter
    >>> blur = StackBlurFilter(radius=6)
    >>> data = blur.to_dict()
    >>> restored = BlurFilter.from_dict(data)
    >>> result = restored.apply(image)
"""

from abc import abstractmethod
from typing import Any, ClassVar, Dict, Literal, Optional, Type
import logging
import uuid

from pydantic import BaseModel, ConfigDict, Field

from .blur import BlurSource, CompletionSignal, check_source, from_grid, stack_blur

logger = logging.getLogger(__name__)

# Registry of filter classes by filter_type
FILTER_REGISTRY: Dict[str, Type['BlurFilter']] = {}


class BlurFilter(BaseModel):
    """
    Base class for serializable blur filters.

    Subclasses must implement:
    - filter_type: Class variable with the filter type string
    - apply(): Applies the filter to an image
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra='ignore',
    )

    # Class variables (not serialized)
    filter_type: ClassVar[str] = "base"
    display_name: ClassVar[str] = "Blur Filter"
    VERSION: ClassVar[int] = 1

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    enabled: bool = Field(default=True)
    version: int = Field(default=1, alias='_version')

    def __init_subclass__(cls, **kwargs):
        """Register filter subclass in registry."""
        super().__init_subclass__(**kwargs)
        if cls.filter_type != "base":
            FILTER_REGISTRY[cls.filter_type] = cls

    @abstractmethod
    def apply(self, source: BlurSource, done: Optional[CompletionSignal] = None) -> BlurSource:
        """
        Apply the filter to an image.

        Args:
            source: PixelGrid, uint8 numpy array (H, W, 3|4) or Pillow image
            done: Optional completion signal, set once the result is ready

        Returns:
            Filtered image of the same kind as the source
        """
        pass

    def __call__(self, source: BlurSource, done: Optional[CompletionSignal] = None) -> BlurSource:
        return self.apply(source, done)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the filter to a JSON-compatible dictionary."""
        self.version = self.VERSION
        data = self.model_dump(by_alias=True, mode='json')
        data['type'] = self.filter_type
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BlurFilter':
        """
        Reconstruct a filter from a dictionary created by to_dict().

        Raises:
            ValueError: If the filter type is unknown
        """
        filter_type = data.get('type', 'base')
        filter_class = FILTER_REGISTRY.get(filter_type)
        if filter_class is None:
            raise ValueError(f"Unknown filter type: {filter_type}")
        return filter_class.model_validate(data)


class StackBlurFilter(BlurFilter):
    """
    StackBlur filter.

    Fast Gaussian blur approximation whose cost does not depend on the radius.
    A radius of 0 leaves the image unchanged.

    Parameters:
        radius: Blur radius in pixels (>= 0)
        narrowing: 'truncate' or 'clamp', None for the configured default
    """

    filter_type: ClassVar[str] = "stackBlur"
    display_name: ClassVar[str] = "Stack Blur"

    radius: int = Field(default=2, ge=0)
    narrowing: Optional[Literal['truncate', 'clamp']] = Field(default=None)

    def apply(self, source: BlurSource, done: Optional[CompletionSignal] = None) -> BlurSource:
        if not self.enabled:
            # Same input checks as an enabled blur, unblurred copy out
            result = from_grid(check_source(source), source)
            logger.debug(f"{self!r} disabled, returning copy")
            if done is not None:
                done.set()
            return result
        return stack_blur(source, self.radius, done=done, narrowing=self.narrowing)

    def __repr__(self) -> str:
        return f"StackBlurFilter(radius={self.radius}, narrowing={self.narrowing}, enabled={self.enabled})"
