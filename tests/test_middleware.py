"""Tests for the scene middleware and scene-filtered handlers."""

import pytest

from scenemachine import (
    Composer,
    Context,
    SceneMiddleware,
    SceneSessionData,
    TransitionController,
    UnknownSceneError,
    hydrate_scene,
)

pytestmark = pytest.mark.anyio


def make_ctx(scene=None):
    return Context(payload={"chat_id": 1}, session=SceneSessionData(scene=scene))


class TestSceneMiddleware:
    """Test the middleware adapter."""

    async def test_attaches_controller(self, registry):
        seen = []

        async def capture(ctx, next_):
            seen.append(ctx.scene)

        ctx = make_ctx()
        await Composer(hydrate_scene(registry), capture).run(ctx)

        assert isinstance(seen[0], TransitionController)

    async def test_fresh_controller_per_request(self, registry):
        seen = []

        async def capture(ctx, next_):
            seen.append(ctx.scene)

        pipeline = Composer(hydrate_scene(registry), capture)
        await pipeline.run(make_ctx())
        await pipeline.run(make_ctx())

        assert seen[0] is not seen[1]

    async def test_custom_attribute(self, registry):
        ctx = make_ctx()

        await Composer(SceneMiddleware(registry, attribute="scenes")).run(ctx)

        assert isinstance(ctx.scenes, TransitionController)
        assert ctx.scene is None

    async def test_always_calls_next(self, registry):
        trail = []

        async def downstream(ctx, next_):
            trail.append(ctx.session.scene)

        await Composer(hydrate_scene(registry), downstream).run(make_ctx("anything"))

        assert trail == ["anything"]

    async def test_errors_pass_through(self, registry):
        async def enter_unknown(ctx, next_):
            await ctx.scene.enter("missing")

        ctx = make_ctx()
        with pytest.raises(UnknownSceneError):
            await Composer(hydrate_scene(registry), enter_unknown).run(ctx)

        assert ctx.session.scene is None


class TestScenePartition:
    """Handlers attached to a scene's builder only see requests in that scene."""

    def build(self, registry, trail):
        middleware, builder = registry.register("a")

        async def in_a(ctx, next_):
            trail.append("a-handler")

        async def fallback(ctx, next_):
            trail.append("fallback")

        builder.use(in_a)
        return Composer(hydrate_scene(registry), middleware, fallback)

    async def test_forwards_when_in_scene(self, registry):
        trail = []

        await self.build(registry, trail).run(make_ctx("a"))

        assert trail == ["a-handler"]

    async def test_skips_when_not_in_scene(self, registry):
        trail = []
        pipeline = self.build(registry, trail)

        await pipeline.run(make_ctx())
        await pipeline.run(make_ctx("b"))

        assert trail == ["fallback", "fallback"]

    async def test_transition_earlier_in_chain_changes_outcome(self, registry):
        """The filter reads the session when reached, not when the request began."""
        trail = []
        middleware, builder = registry.register("a")
        builder.use(lambda ctx, next_: trail.append("a-handler"))

        async def enter_a(ctx, next_):
            await ctx.scene.enter("a")
            await next_()

        pipeline = Composer(hydrate_scene(registry), enter_a, middleware)
        await pipeline.run(make_ctx())

        assert trail == ["a-handler"]

    async def test_exit_earlier_in_chain_skips_partition(self, registry):
        trail = []
        middleware, builder = registry.register("a")
        builder.use(lambda ctx, next_: trail.append("a-handler"))

        async def leave(ctx, next_):
            await ctx.scene.exit()
            await next_()

        pipeline = Composer(hydrate_scene(registry), leave, middleware)
        await pipeline.run(make_ctx("a"))

        assert trail == []

    async def test_partition_passes_on_when_handler_calls_next(self, registry):
        trail = []
        middleware, builder = registry.register("a")

        async def in_a(ctx, next_):
            trail.append("a-handler")
            await next_()

        builder.use(in_a)
        pipeline = Composer(hydrate_scene(registry), middleware)
        pipeline.use(lambda ctx, next_: trail.append("after"))

        await pipeline.run(make_ctx("a"))

        assert trail == ["a-handler", "after"]

    async def test_handler_leaving_scene_from_inside_partition(self, registry, hook):
        on_exit = hook("on_exit")
        middleware, builder = registry.register("a", on_exit=on_exit)

        async def finish(ctx, next_):
            await ctx.scene.exit()

        builder.use(finish)
        ctx = make_ctx("a")

        await Composer(hydrate_scene(registry), middleware).run(ctx)

        assert ctx.session.scene is None
        assert on_exit.calls == [None]
