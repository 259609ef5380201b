import logging
import re

from stabchain import (
    BSGS, Config, LoggingReporter, Perm, PermGroup, Stats, parse_group)

# Three permutations that generate the Rubik's Cube, given as 0-based images.
# Shamelessly stolen from
# https://github.com/runjak/2020-06-06.enthusiasticon/blob/master/src/permutations.ts#L58

X = [
   9, 10, 11, 12, 13, 14, 15, 16, 17,
  45, 46, 47, 48, 49, 50, 51, 52, 53,
  24, 21, 18, 25, 22, 19, 26, 23, 20,
   8,  7,  6,  5,  4,  3,  2,  1,  0,
  38, 41, 44, 37, 40, 43, 36, 39, 42,
  35, 34, 33, 32, 31, 30, 29, 28, 27,
]
Y = [
  20, 23, 26, 19, 22, 25, 18, 21, 24,
  11, 14, 17, 10, 13, 16,  9, 12, 15,
  47, 50, 53, 46, 49, 52, 45, 48, 51,
  33, 30, 27, 34, 31, 28, 35, 32, 29,
   2,  5,  8,  1,  4,  7,  0,  3,  6,
  38, 41, 44, 37, 40, 43, 36, 39, 42,
]
R = [
   0,  1, 11,  3,  4, 14,  6,  7, 17,
   9, 10, 47, 12, 13, 50, 15, 16, 53,
  24, 21, 18, 25, 22, 19, 26, 23, 20,
   8, 28, 29,  5, 31, 32,  2, 34, 35,
  36, 37, 38, 39, 40, 41, 42, 43, 44,
  45, 46, 33, 48, 49, 30, 51, 52, 27,
]

rubiks_gens = [Perm([x + 1 for x in images]) for images in [X, Y, R]]

center_cubelet_faces = list(range(5, 55, 9))


def fmt_large_num(x):
    return re.subn(r'(?<=\d)(?=(\d{3})+$)', ',', str(x))[0]


def print_all_stats(bsgs):
    print_sgs_stats(bsgs)
    print_performance_stats(bsgs)


def print_sgs_stats(bsgs):
    print(f"  group order = {fmt_large_num(bsgs.order())}")
    print(f"  strong generating set base = {bsgs.base}")
    print(f"  strong generating set size = {len(bsgs.strong_generators())}")


def print_performance_stats(bsgs):
    print(f"  took {fmt_large_num(bsgs.cfg.stats.products)} group products")
    if bsgs.cfg.stats.rounds:
        print(f"  took {bsgs.cfg.stats.rounds} sifting rounds")


logging.basicConfig(
    format='[%(asctime)s.%(msecs)03d] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
    level=logging.INFO,
)

print("""
We're going to build a strong generating set for the Rubik's Cube group,
including reorientations of the whole cube. This is a permutation group of the
9 * 6 = 54 visible cublet faces.

It is generated using the operations X, Y which allow us to arbitrarily
reorient the whole cube without turning any sides.
""")

print('X =', rubiks_gens[0])
print('Y =', rubiks_gens[1])

print("""
And the operation R, which turns a single side. By reorienting the cube we can
use this to turn any side and thus get all possible ways to permute the cube.
""")
print('R =', rubiks_gens[2])

print("""
------------------------------------------------------------------------------
First we're going to use the deterministic Schreier-Sims algorithm without
limiting the depth of Schreier trees. Progress is logged at INFO level.
""")

bsgs = BSGS(54, rubiks_gens, Config(transversals='schreier_trees'),
            reporter=LoggingReporter(level=logging.INFO))
print_all_stats(bsgs)

known_group_order = bsgs.order()

print("""
------------------------------------------------------------------------------
Next we're going to use shallow Schreier trees, which require more work to
build, but ensure that sifting can be done efficiently. That usually pays off.
Storing every transversal element explicitly avoids the multiplications along
tree paths altogether, at the cost of memory.
""")

for transversals in ['shallow_schreier_trees', 'explicit']:
    print(f'{transversals}:')
    bsgs = BSGS(54, rubiks_gens, Config(transversals=transversals))
    print_all_stats(bsgs)

print("""
------------------------------------------------------------------------------
Using the Monte Carlo Random Schreier-Sims algorithm is a lot more efficient.
""")

bsgs = BSGS(54, rubiks_gens, Config(construction='random'))
print_all_stats(bsgs)

print("""
------------------------------------------------------------------------------
It doesn't guarantee that the result is correct though, as the algorithm
terminates after successfully sifting k random elements. If we could generate
uniform samples of our group, the chance of failure would be limited by 2^-k.
As we're using a heuristic to generate random elements, we do not even have
that guarantee. In practice though, the chance of failure is often smaller.

To demonstrate failure, we set k (called exit_rounds in the code) to a small
value like 1 and repeatedly build a strong generating set until we get the
wrong group order.
""")

while True:
    bsgs = BSGS(54, rubiks_gens, Config(construction='random', exit_rounds=1))
    if bsgs.order() != known_group_order:
        break

print_all_stats(bsgs)

print("""
------------------------------------------------------------------------------
If we know the order of the group though, we can turn it into a Las Vegas
algorithm. That is even more efficient, as it terminates as soon as the strong
generating set is complete and thus needs fewer sifting rounds.
""")

bsgs = BSGS(54, rubiks_gens, Config(construction='random'),
            known_order=known_group_order)
print_all_stats(bsgs)

print("""
------------------------------------------------------------------------------
If we don't know the order of the group we can turn the Monte Carlo algorithm
into a Las Vegas algorithm by performing a verification step. If the
verification fails, it will provide us with a group element that doesn't sift
through the incomplete strong generating set. In that case we add the sifting
residue and perform some more Random Schreier-Sims rounds.

We verify by generating all Schreier generators and sifting them. That's
basically what the deterministic Schreier-Sims algorithm does, so we lose the
advantage of the faster Random Schreier-Sims approach. To illustrate that the
verification does indeed work, we again set exit_rounds to 1.
""")

while True:
    bsgs = BSGS(54, rubiks_gens, Config(construction='random', exit_rounds=1))
    failures = bsgs.build_verified()
    if failures:
        break

print(f'  verification failures = {failures}')
print_all_stats(bsgs)

saved_bsgs = bsgs

print("""
------------------------------------------------------------------------------
If you happen to be a Rubik's Cube enthusiast, you might already have noticed,
that the printed group order is larger than the roughly 43 quintillion that is
often quoted.

This is because we're also counting different orientations of the cube. If we
don't want to count them, we can stabilize the center cubelet faces of each
cube face, thereby fixing them in place.

One way to do this is to specify the center cublet faces as a prefix of the
base before running the Schreier-Sims algorithm and then take the first
subgroup in the stabilizer chain that fixes these points.

Here we're using the known order of the group including cube reorientations to
get the faster Las Vegas variant.
""")

print(f'  base prefix = {center_cubelet_faces}')
bsgs = BSGS(54, rubiks_gens, Config(construction='random'),
            base=center_cubelet_faces, known_order=known_group_order)

print_sgs_stats(bsgs)

print()
print('subgroup stabilizing the cube orientation:')
print_sgs_stats(bsgs.subchain(len(center_cubelet_faces)))

print_performance_stats(bsgs)

print("""
------------------------------------------------------------------------------
If we already generated a strong generating set but with a different base, it's
often possible to perform a base change faster than generating a new strong
generating set from scratch.

This keeps the levels that already match and rebuilds the rest using the Las
Vegas (as we know the group orders) Random Schreier-Sims algorithm, fed with
the old strong generators and uniform samples from the old chain.
""")

bsgs = saved_bsgs
bsgs.cfg.stats = Stats()  # Reset stats
print(f'  old base = {bsgs.base}')
bsgs.reporter = LoggingReporter(level=logging.INFO)
bsgs.change_base(center_cubelet_faces)
print_sgs_stats(bsgs)
print()
print('subgroup stabilizing the cube orientation:')
print_sgs_stats(bsgs.subchain(len(center_cubelet_faces)))
print_performance_stats(bsgs)

print("""
------------------------------------------------------------------------------
The same can be done on the group level, where the pointwise stabilizer is
computed by such a base change behind the scenes.
""")

cube = PermGroup.from_bsgs(saved_bsgs)
oriented = cube.pointwise_stabilizer(center_cubelet_faces)
print(f'  group order = {fmt_large_num(oriented.order())}')
print(f'  turning R is a member: {rubiks_gens[2] in oriented}')
print(f'  reorienting X is a member: {rubiks_gens[0] in oriented}')

print("""
------------------------------------------------------------------------------
Finally, some smaller groups can be decomposed. The group of two independent
triangles and a swap is a direct product of groups acting on disjoint sets of
points, and S_2 wr S_3 is found to be a wreath product of the swaps inside its
three blocks and the permutations of the blocks.
""")

desc = parse_group('degree:8,order:18,gens:[(1,2,3),(4,5,6),(7,8)]')
grp = desc.to_group()
print(f'  {grp}')
for factor in grp.disjoint_decomposition():
    print(f'    factor {factor}')

grp = PermGroup.wreath_product(PermGroup.symmetric(2), PermGroup.symmetric(3))
print(f'  {grp}')
for factor in grp.wreath_decomposition():
    print(f'    factor {factor}')
