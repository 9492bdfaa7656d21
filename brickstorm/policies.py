def policy(env):
    # Strategy: Track the lowest ball that is falling (the most urgent one), or the
    # lowest ball overall when none are falling. Move the paddle centre toward its x
    # with a dead zone of a few units so the paddle doesn't jitter. Tap fire on every
    # other step while the laser effect is on, since firing is edge-triggered.
    state = env.state
    paddle = state.paddle

    movement = 0
    if state.balls:
        falling = [b for b in state.balls if b.dy > 0] or state.balls
        target = max(falling, key=lambda b: b.y)
        dx = target.x - paddle.center_x
        dead_zone = paddle.speed
        if dx > dead_zone:
            movement = 4  # Right
        elif dx < -dead_zone:
            movement = 3  # Left

    fire = 1 if state.effects.laser and env.steps % 2 == 0 else 0
    return [movement, fire, 0]
