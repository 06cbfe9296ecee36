"""Scene generator and factory tests."""

import numpy as np
import pytest

from ambience.sound.base import AUDIO_FORMAT, SampleStream
from ambience.sound.factory import PRESETS, Scene, create, list_scenes, preset_for
from ambience.sound.noise import NoiseColor, NoiseStream
from ambience.sound.scenes import (
    CafeStream,
    FireStream,
    ForestStream,
    OceanStream,
    RainStream,
    ThunderStream,
    WindStream,
)

SR = AUDIO_FORMAT.sample_rate
ALL_SCENES = list(Scene)


def _spans(mask: np.ndarray) -> list[tuple[int, int]]:
    """(start, stop) of each run of True values."""
    padded = np.concatenate([[0], mask.astype(np.int8), [0]])
    edges = np.flatnonzero(np.diff(padded))
    return list(zip(edges[::2], edges[1::2]))


class TestSampleStreams:
    @pytest.mark.parametrize("scene", ALL_SCENES, ids=lambda s: s.value)
    def test_sixty_seconds_stay_in_bounds(self, scene):
        stream = create(scene, seed=42)
        for _ in range(60):
            # Raw render, before the clip in fill()
            audio = stream.render(SR)
            assert np.all(np.isfinite(audio))
            assert np.max(np.abs(audio)) <= 1.0

    def test_bounds_check_sees_unclipped_level(self, monkeypatch):
        monkeypatch.setattr(RainStream, "gain", 50.0)
        stream = RainStream(seed=42)
        assert np.max(np.abs(stream.render(SR))) > 1.0
        assert np.max(np.abs(stream.read(SR))) <= 1.0

    @pytest.mark.parametrize("scene", ALL_SCENES, ids=lambda s: s.value)
    @pytest.mark.parametrize("n", [1, 2, 17, 2205, 44100, 100_000])
    def test_fill_writes_exactly_n_frames(self, scene, n):
        stream = create(scene, seed=1)
        buffer = np.full((n, 2), np.nan, dtype=np.float32)
        assert stream.fill(buffer, n) == n
        assert not np.isnan(buffer).any()
        assert np.array_equal(buffer[:, 0], buffer[:, 1])

    def test_fill_leaves_tail_of_larger_buffer(self):
        stream = create(Scene.RAIN, seed=1)
        buffer = np.full((100, 2), 5.0, dtype=np.float32)
        assert stream.fill(buffer, 60) == 60
        assert np.all(buffer[60:] == 5.0)
        assert np.all(np.abs(buffer[:60]) <= 1.0)

    def test_fill_zero_frames(self):
        stream = create(Scene.FOREST, seed=1)
        assert stream.fill(np.empty((0, 2), dtype=np.float32), 0) == 0

    @pytest.mark.parametrize("scene", ALL_SCENES, ids=lambda s: s.value)
    def test_same_seed_is_bit_identical(self, scene):
        a = create(scene, seed=1234)
        b = create(scene, seed=1234)
        for n in (100, 2205, 5000, 44100):
            assert np.array_equal(a.read(n), b.read(n))

    @pytest.mark.parametrize("scene", ALL_SCENES, ids=lambda s: s.value)
    @pytest.mark.parametrize("sizes", [[2205, 2205], [1000, 3410], [1] * 10 + [4400]])
    def test_block_split_does_not_change_output(self, scene, sizes):
        whole = create(scene, seed=77).read(4410)
        stream = create(scene, seed=77)
        split = np.concatenate([stream.read(n) for n in sizes])
        assert np.array_equal(whole, split)

    @pytest.mark.parametrize("scene", [Scene.THUNDER, Scene.FOREST, Scene.FIRE],
                             ids=lambda s: s.value)
    def test_block_split_with_events(self, scene):
        a = create(scene, seed=5)
        b = create(scene, seed=5)
        a_out = np.concatenate([a.read(2205) for _ in range(200)])
        b_out = np.concatenate([b.read(1024) for _ in range(430)] + [b.read(200)])
        assert np.array_equal(a_out, b_out)

    @pytest.mark.parametrize("scene", ALL_SCENES, ids=lambda s: s.value)
    def test_different_seeds_differ(self, scene):
        a = create(scene, seed=1).read(4410)
        b = create(scene, seed=2).read(4410)
        assert not np.array_equal(a, b)

    @pytest.mark.parametrize("scene", ALL_SCENES, ids=lambda s: s.value)
    def test_not_silent(self, scene):
        block = create(scene, seed=3).read(SR)
        assert np.std(block) > 1e-3

    def test_output_format(self):
        block = create(Scene.CAFE, seed=0).read(10)
        assert block.shape == (10, 2)
        assert block.dtype == np.float32


class TestScenes:
    def test_rain_level(self):
        audio = RainStream(seed=0).render(SR * 5)
        # one-pole(0.95) of uniform noise has std ~0.092, times 0.4
        assert 0.025 < np.std(audio) < 0.05

    def test_cafe_quieter_than_rain(self):
        rain = RainStream(seed=0).render(SR * 2)
        cafe = CafeStream(seed=0).render(SR * 2)
        np.testing.assert_allclose(cafe, rain * 0.25 / 0.4)

    def test_ocean_swells(self):
        audio = OceanStream(seed=0).render(SR * 3)
        crest = int((np.pi / 2) / OceanStream.PHASE_STEP)
        trough = int((3 * np.pi / 2) / OceanStream.PHASE_STEP)
        loud = np.std(audio[crest - 2000:crest + 2000])
        quiet = np.std(audio[trough - 2000:trough + 2000])
        assert loud > 20 * quiet

    def test_ocean_phase_continuous_across_blocks(self):
        whole = OceanStream(seed=8)
        split = OceanStream(seed=8)
        a = whole.render(10000)
        b = np.concatenate([split.render(3000), split.render(7000)])
        np.testing.assert_allclose(a, b, rtol=1e-9, atol=1e-12)

    def test_wind_gusts(self):
        stream = WindStream(seed=0)
        assert stream.phase_step * SR * WindStream.GUST_PERIOD_SECONDS == pytest.approx(2 * np.pi)
        audio = stream.render(SR * 7)
        second_rms = [np.std(audio[i * SR:(i + 1) * SR]) for i in range(7)]
        assert max(second_rms) > 2 * min(second_rms)

    def test_fire_pops(self):
        stream = FireStream(seed=0)
        stream.render(SR)
        # 3 in 1000 per idle sample, 50-200 samples each
        assert 40 < stream.pops.events_armed < 200

    def test_forest_chirps(self):
        stream = ForestStream(seed=0)
        for _ in range(60):
            audio = stream.render(SR)
            assert np.max(np.abs(audio)) <= 0.15 + stream.CHIRP_LEVEL
        assert 3 <= stream.birds.events_armed <= 45

    def test_forest_chirp_pitch(self):
        stream = ForestStream(seed=0)
        stream.birds.trigger_range = 1  # arm on the first sample
        stream.birds.duration = 8000
        stream.bed.gain = 0.0
        audio = stream.render(4096)
        freqs = np.fft.rfftfreq(len(audio), d=1.0 / SR)
        peak = freqs[np.argmax(np.abs(np.fft.rfft(audio)))]
        assert 1900 <= peak <= 4100
        assert stream.birds.value == pytest.approx(peak, abs=2 * SR / 4096)

    def test_thunder_rumble_span_is_half_a_second(self):
        for seed in range(20):
            stream = ThunderStream(seed=seed)
            envelopes = []
            for _ in range(10):
                block = stream.read(SR)
                assert np.all(np.abs(block) <= 1.0)
                envelopes.append(stream.last_envelope)
            envelope = np.concatenate(envelopes)
            complete = [
                (start, stop) for start, stop in _spans(envelope > 0)
                if stop < len(envelope)
            ]
            if complete:
                break
        else:
            pytest.fail("no rumble completed within 10s for any seed")

        assert any(stop - start == SR // 2 for start, stop in complete)
        start, stop = complete[0]
        assert envelope[start] == pytest.approx(1.0)
        assert envelope[stop - 1] == pytest.approx(1.0 / (SR // 2))

    def test_thunder_rumble_adds_energy(self):
        stream = ThunderStream(seed=0)
        stream.rumble.trigger_range = 1
        loud = stream.render(SR // 4)
        quiet = RainStream(seed=0).render(SR // 4)
        assert np.std(loud) > 2 * np.std(quiet)
        assert 0.3 <= stream.rumble.value < 0.8


class TestFactory:
    @pytest.mark.parametrize("scene, cls", [
        (Scene.RAIN, RainStream),
        (Scene.THUNDER, ThunderStream),
        (Scene.OCEAN, OceanStream),
        (Scene.FOREST, ForestStream),
        (Scene.FIRE, FireStream),
        (Scene.WIND, WindStream),
        (Scene.CAFE, CafeStream),
    ])
    def test_creates_scene_stream(self, scene, cls):
        assert isinstance(create(scene), cls)

    @pytest.mark.parametrize("scene, color", [
        (Scene.WHITE_NOISE, NoiseColor.WHITE),
        (Scene.BROWN_NOISE, NoiseColor.BROWN),
        (Scene.PINK_NOISE, NoiseColor.PINK),
    ])
    def test_creates_noise_stream(self, scene, color):
        stream = create(scene)
        assert isinstance(stream, NoiseStream)
        assert stream.color == color

    @pytest.mark.parametrize("value", ["rain", "RAIN", "Rain", " rain "])
    def test_accepts_names(self, value):
        assert isinstance(create(value), RainStream)

    def test_accepts_display_names(self):
        assert isinstance(create("Café"), CafeStream)
        assert isinstance(create("cafe"), CafeStream)
        for preset in PRESETS:
            assert Scene.parse(preset.name) == preset.scene

    def test_accepts_spaced_names(self):
        stream = create("Brown Noise")
        assert isinstance(stream, NoiseStream)
        assert stream.color == NoiseColor.BROWN

    @pytest.mark.parametrize("value", ["thunderstorm", "", None, 42])
    def test_unknown_falls_back_to_white_noise(self, value):
        stream = create(value)
        assert isinstance(stream, NoiseStream)
        assert stream.color == NoiseColor.WHITE

    def test_fresh_state(self):
        stream = create(Scene.THUNDER, seed=0)
        assert stream.rumble.countdown == 0
        assert stream.rain.bed.value == 0.0
        assert isinstance(stream, SampleStream)

    def test_each_call_is_independent(self):
        a = create(Scene.RAIN, seed=5)
        a.read(1000)
        b = create(Scene.RAIN, seed=5)
        assert b.bed.value == 0.0

    def test_list_scenes_catalogue_order(self):
        scenes = list_scenes()
        assert scenes[0] == Scene.RAIN
        assert len(scenes) == len(Scene) == 10
        assert set(scenes) == set(Scene)

    def test_every_scene_has_a_preset(self):
        for scene in Scene:
            assert preset_for(scene).scene == scene
        assert len({p.name for p in PRESETS}) == len(PRESETS)
