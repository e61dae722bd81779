"""Record storage for scenes, assets, placements and exports.

The store is an injectable capability (get/put/clear) rather than module
level state. PlacementService layers the record lifecycle rules on top:
committed scene photos are immutable, placements must reference an existing
scene and asset, and exports are committed once their image is uploaded.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol, TypeVar

from pydantic import BaseModel

from ..core.config import PhotoPlaceConfig
from ..mesh.normalize import BoundingBox, compute_asset_normalization
from .records import (
    Asset,
    AssetUnits,
    ExportRecord,
    ExportType,
    Placement,
    PlacementRenderSettings,
    RecordKind,
    Scene,
)
from .transform import Transform, create_identity_transform

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class RecordNotFoundError(LookupError):
    """Raised when a record id does not exist in the store."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind.capitalize()} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class SceneAlreadyCommittedError(ValueError):
    """Raised when committing a scene whose original photo is already set."""


class RecordStore(Protocol):
    """Minimal storage capability used by PlacementService."""

    def get(self, kind: RecordKind, record_id: str) -> BaseModel | None: ...

    def put(self, kind: RecordKind, record: BaseModel) -> None: ...

    def values(self, kind: RecordKind) -> list[BaseModel]: ...

    def clear(self) -> None: ...


class MemoryRecordStore:
    """Volatile per-instance store keyed by record kind and id."""

    def __init__(self) -> None:
        self._records: dict[str, dict[str, BaseModel]] = {}

    def get(self, kind: RecordKind, record_id: str) -> BaseModel | None:
        return self._records.get(kind, {}).get(record_id)

    def put(self, kind: RecordKind, record: BaseModel) -> None:
        self._records.setdefault(kind, {})[record.id] = record  # type: ignore[attr-defined]

    def values(self, kind: RecordKind) -> list[BaseModel]:
        return list(self._records.get(kind, {}).values())

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return sum(len(records) for records in self._records.values())


DEMO_ASSETS = (
    Asset(
        id="ast_demo_chair",
        name="Modern Chair",
        glb_url="/assets/chair.glb",
        thumbnail_url="/assets/chair-thumb.png",
    ),
    Asset(
        id="ast_demo_lamp",
        name="Desk Lamp",
        glb_url="/assets/lamp.glb",
        thumbnail_url="/assets/lamp-thumb.png",
    ),
)


class PlacementService:
    """Scene, asset, placement and export lifecycle over a RecordStore."""

    def __init__(
        self,
        store: RecordStore | None = None,
        config: PhotoPlaceConfig | None = None,
    ):
        self.store: RecordStore = store if store is not None else MemoryRecordStore()
        self.config = config or PhotoPlaceConfig.default()
        self._seed_assets()

    def _seed_assets(self) -> None:
        if not self.config.placement.seed_demo_assets:
            return
        if self.store.values("asset"):
            return
        for asset in DEMO_ASSETS:
            self.store.put("asset", asset)
        logger.debug("Seeded %d demo assets", len(DEMO_ASSETS))

    def _require(self, kind: RecordKind, record_id: str, model: type[RecordT]) -> RecordT:
        record = self.store.get(kind, record_id)
        if not isinstance(record, model):
            raise RecordNotFoundError(kind, record_id)
        return record

    # Scenes

    def create_scene(self) -> Scene:
        """Create a new scene with no photo attached."""
        scene = Scene()
        self.store.put("scene", scene)
        logger.debug("Created scene %s", scene.id)
        return scene

    def get_scene(self, scene_id: str) -> Scene | None:
        record = self.store.get("scene", scene_id)
        return record if isinstance(record, Scene) else None

    def commit_scene(
        self,
        scene_id: str,
        photo_original_url: str,
        photo_working_url: str,
        width: int,
        height: int,
        exif_orientation: int | None = None,
    ) -> Scene:
        """Attach the uploaded photo to a scene.

        Raises:
            RecordNotFoundError: If the scene does not exist
            SceneAlreadyCommittedError: If the original photo is already set
        """
        scene = self._require("scene", scene_id, Scene)
        if scene.is_committed:
            raise SceneAlreadyCommittedError(
                f"Scene {scene_id} already committed. Original photo is immutable."
            )

        updated = scene.model_copy(update={
            "photo_original_url": photo_original_url,
            "photo_working_url": photo_working_url,
            "photo_original_width": width,
            "photo_original_height": height,
            "photo_working_width": width,
            "photo_working_height": height,
            "photo_exif_orientation": exif_orientation,
            "updated_at": datetime.now(),
        })
        self.store.put("scene", updated)
        logger.debug("Committed scene %s (%dx%d)", scene_id, width, height)
        return updated

    def calibrate_scene(
        self,
        scene_id: str,
        camera_fov_deg: float | None = None,
        pitch_deg: float | None = None,
    ) -> Scene:
        """Record user calibration overrides on a scene."""
        scene = self._require("scene", scene_id, Scene)
        updated = scene.model_copy(update={
            "user_camera_fov_deg": camera_fov_deg,
            "user_pitch_deg": pitch_deg,
            "calibration_source": "AUTO_PLUS_USER" if scene.auto_camera_fov_deg is not None else "USER",
            "updated_at": datetime.now(),
        })
        self.store.put("scene", updated)
        return updated

    # Assets

    def list_assets(self) -> list[Asset]:
        return [a for a in self.store.values("asset") if isinstance(a, Asset)]

    def get_asset(self, asset_id: str) -> Asset | None:
        record = self.store.get("asset", asset_id)
        return record if isinstance(record, Asset) else None

    def register_asset(
        self,
        name: str,
        glb_url: str,
        bbox: BoundingBox,
        import_scale: float = 1.0,
        units: AssetUnits = "METERS",
        thumbnail_url: str | None = None,
    ) -> Asset:
        """Store a new asset along with its normalization metadata."""
        asset = Asset(
            name=name,
            glb_url=glb_url,
            units=units,
            import_scale=import_scale,
            thumbnail_url=thumbnail_url,
            normalization=compute_asset_normalization(bbox, import_scale),
        )
        self.store.put("asset", asset)
        logger.debug("Registered asset %s (%s)", asset.id, name)
        return asset

    # Placements

    def create_placement(
        self,
        scene_id: str,
        asset_id: str,
        transform: Transform | None = None,
        render: PlacementRenderSettings | None = None,
        variant_id: str | None = None,
    ) -> Placement:
        """Place an asset in a scene.

        Raises:
            RecordNotFoundError: If the scene or asset does not exist
        """
        self._require("scene", scene_id, Scene)
        self._require("asset", asset_id, Asset)

        params = self.config.placement
        placement = Placement(
            scene_id=scene_id,
            asset_id=asset_id,
            transform=transform or create_identity_transform(),
            render=render or PlacementRenderSettings(
                occlusion_dilate_px=params.occlusion_dilate_px,
                occlusion_feather_px=params.occlusion_feather_px,
            ),
            variant_id=variant_id,
            renderer_version=params.renderer_version,
        )
        self.store.put("placement", placement)
        logger.debug("Created placement %s in scene %s", placement.id, scene_id)
        return placement

    def get_placement(self, placement_id: str) -> Placement | None:
        record = self.store.get("placement", placement_id)
        return record if isinstance(record, Placement) else None

    def update_placement(
        self,
        placement_id: str,
        transform: Transform | None = None,
        render: PlacementRenderSettings | None = None,
        variant_id: str | None = None,
        clear_variant: bool = False,
    ) -> Placement:
        """Partially update a placement. Omitted fields are kept."""
        existing = self._require("placement", placement_id, Placement)

        update: dict = {"updated_at": datetime.now()}
        if transform is not None:
            update["transform"] = transform
        if render is not None:
            update["render"] = render
        if clear_variant:
            update["variant_id"] = None
        elif variant_id is not None:
            update["variant_id"] = variant_id

        updated = existing.model_copy(update=update)
        self.store.put("placement", updated)
        return updated

    # Exports

    def create_export(
        self,
        placement_id: str,
        width: int,
        height: int,
        render_settings_hash: str,
        image_type: ExportType | None = None,
    ) -> ExportRecord:
        """Create an uncommitted export record for a placement."""
        self._require("placement", placement_id, Placement)
        record = ExportRecord(
            placement_id=placement_id,
            type=image_type or self.config.export.image_type,
            width=width,
            height=height,
            render_settings_hash=render_settings_hash,
        )
        self.store.put("export", record)
        logger.debug("Created export %s for placement %s", record.id, placement_id)
        return record

    def commit_export(self, export_id: str, url: str) -> ExportRecord:
        """Attach the uploaded image URL to an export."""
        existing = self._require("export", export_id, ExportRecord)
        updated = existing.model_copy(update={"url": url})
        self.store.put("export", updated)
        return updated

    def get_export(self, export_id: str) -> ExportRecord | None:
        record = self.store.get("export", export_id)
        return record if isinstance(record, ExportRecord) else None

    def clear(self) -> None:
        """Drop all records and re-seed the demo assets."""
        self.store.clear()
        self._seed_assets()
