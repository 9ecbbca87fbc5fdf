"""
Sum of Squares Example
======================

This example simulates a simple linear regression and shows how the total
variation of y splits into an explained and a residual part, and how the
F-statistic reacts to more noise or less signal.
"""

import lmsim

print("=" * 60)
print("SUM OF SQUARES EXAMPLE")
print("=" * 60)

# 1. Simulate 10 observations with slope 2 and error standard deviation 5
result = lmsim.simulate(sample_size=10, effect=2.0, noise=5.0, seed=1)

print(f"\nFitted line: y = {result.intercept:.3f} + {result.slope:.3f}x")
print(f"Explained SS: {result.ss_explained:.2f}")
print(f"Residual SS:  {result.ss_residual:.2f}")
print(f"Total SS:     {result.ss_total:.2f}")
print(f"F-statistic:  {result.f_statistic:.3f} (p = {result.p_value:.4f})")

# 2. Doubling the noise divides F by roughly four
noisy = lmsim.simulate(sample_size=10, effect=2.0, noise=10.0, seed=1)
print("\nDouble the noise:")
print(f"F-statistic: {noisy.f_statistic:.3f} (ratio {result.f_statistic / noisy.f_statistic:.2f})")

# 3. ...and so does halving the effect
weak = lmsim.simulate(sample_size=10, effect=1.0, noise=5.0, seed=1)
print("\nHalve the effect:")
print(f"F-statistic: {weak.f_statistic:.3f} (ratio {result.f_statistic / weak.f_statistic:.2f})")

# 4. Sweep one input while holding the others fixed
print("\n" + "=" * 60)
print("NOISE SWEEP")
print("=" * 60)

simulator = lmsim.RegressionSimulator()
table = simulator.sweep(
    "noise",
    [1.0, 2.5, 5.0, 10.0, 20.0],
    sample_size=10,
    effect=2.0,
    seed=1,
    progress_callback=lmsim.PrintReporter(),
)
print(table[["ss_explained", "ss_residual", "f_statistic", "p_value"]].round(3))

# 5. Draw both views side by side
simulator.plot(result, show=True)
